"""NiceGUI viewer for the activity report."""
