"""Toolkit of SQL storage, message codec, socket request helpers, wpa_cli control and headless UI models."""

__version__ = "0.1.0"