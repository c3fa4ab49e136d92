"""Domain layer for STAGEHAND.

Value objects describing artifacts, probes, init units and launch candidates,
plus the error taxonomy shared by every component. No I/O lives here.
"""
