"""Encode log events as node-bunyan JSON lines."""
