"""
Service layer for the face editor.

Services coordinate between the profile store and whatever front end drives
the editing session.
"""

from faceeditor.services.editor_service import ProfileEditor

__all__ = [
    "ProfileEditor",
]
