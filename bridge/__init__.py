"""Local HTTP bridge between a browser UI and the viewer session."""
