"""stars-sync: keep a Notion database in sync with your GitHub stars."""

__version__ = "0.1.0"
