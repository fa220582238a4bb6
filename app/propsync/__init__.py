"""propsync - keep shared .properties localization files in sync.

Extracts namespaced localization entries from free-form text, merges them into
a remote properties document without disturbing its formatting, and keeps the
sibling locale documents ready for retranslation.
"""

__version__ = "0.1.0"
