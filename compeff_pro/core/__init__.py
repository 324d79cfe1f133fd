"""Core calculation modules for CompEff Pro.

This package contains the property and data layer:
- fluids: CoolProp-based fluid property interface and fluid catalogue
- efficiency: Empirical and screw efficiency correlations
- polynomial: AHRI 540 compressor polynomials and flow-model state
- compressors: Compressor model database
- config: Calculation persistence (JSON)
- history: Recent calculation store
"""
