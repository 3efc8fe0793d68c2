"""pygame front end: renderer and keyboard driver."""
