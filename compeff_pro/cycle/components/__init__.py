"""Cycle components: compressor stage, economizers, heat exchangers, expansion valve."""
