"""Project scaffolding pipeline: download, extract, materialize."""
