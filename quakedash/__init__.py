"""
quakedash package
=================

Earthquake Record Processor: turns one CSV snapshot of earthquake records
into the read-only views a static dashboard report is built from.

- Dataset loading is in `quakedash/loader.py`.
- Cleaning, categorization and the views are in `quakedash/engine.py`.
- The DOCX dashboard report is in `quakedash/report.py`.
- The CLI entry point is in `quakedash/cli.py`.
"""

__version__ = '0.1.0'
