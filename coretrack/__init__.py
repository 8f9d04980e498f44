"""CoreTrack project management API."""
