"""Audit modules: probes, orchestration and reporting."""
