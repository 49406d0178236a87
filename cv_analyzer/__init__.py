"""CV Analyzer: JD requirement extraction and résumé ranking over an n8n webhook."""

__version__ = "0.1.0"
