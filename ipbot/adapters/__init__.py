"""Adapters — Discord front-ends and the IP lookup client."""
