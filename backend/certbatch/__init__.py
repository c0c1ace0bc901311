"""
Certificate batch renderer - backend core package

Package layout:
- config/     runtime configuration, credential store, layout presets
- models/     data models (records, regions, jobs, reports)
- render/     coordinate scaling, text shaping, compositing, output naming
- mail/       email dispatch of generated certificates
- pipeline/   batch fan-out and batch management
- records.py  tabular record loading
- cli.py      command line entry point
"""

__version__ = "0.1.0"
