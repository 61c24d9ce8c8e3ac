"""FolderView: browse, preview and stream files under a single root folder."""

__version__ = "0.1.0"
