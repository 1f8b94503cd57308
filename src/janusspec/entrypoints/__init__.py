"""Entry points for janusspec."""
