"""Route modules for the taskboard web app."""
