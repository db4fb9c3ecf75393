"""Face editor: persist a face label and color into a key-value configuration store."""

__version__ = "0.1.0"
