"""Renderer building blocks without a GPU: formats, pipelines, render passes, resource planning, diagnostics and utilities."""

__version__ = "0.1.0"