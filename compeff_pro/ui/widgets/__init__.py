"""Reusable form, plot and result widgets."""
