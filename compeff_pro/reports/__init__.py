"""Calculation report generation."""
