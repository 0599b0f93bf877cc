"""
Pipeline Package
================

Modules:
  insights_pipeline - runs every analysis over a snapshot, reports status
  summary_builder   - plain-text digests for UI cards
"""
