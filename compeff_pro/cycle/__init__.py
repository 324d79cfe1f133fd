"""Compressor cycle calculations for CompEff Pro.

One solver per calculation mode:
- refrigeration: single-stage oil-injected refrigeration / heat pump (m2)
- gas: oil-injected gas compression (m3)
- two_stage_single: compound screw with economizer (m5)
- two_stage_double: LP and HP compressors with up to three economizers (m6)
- heat_pump: ammonia heat pump with hot-water circuit (m7)
- solver: mode dispatch and result flattening
"""
