"""janusspec command-line interface."""
