"""End-to-end tests of the ``janusspec`` command."""
