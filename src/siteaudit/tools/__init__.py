"""Low-level network tools shared by the probes."""
