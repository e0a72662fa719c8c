"""Projects and project membership."""
