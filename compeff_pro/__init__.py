"""CompEff Pro: Compressor Efficiency Pro.

Performance and efficiency calculations for oil-injected refrigeration,
gas and heat-pump compressors.
"""

__app_name__ = "CompEff Pro"
__version__ = "0.1.0"
