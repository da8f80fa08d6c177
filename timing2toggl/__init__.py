"""Convert Timing exports (CSV or JSON) into Toggl CSV import files."""

__version__ = "0.1.0"
