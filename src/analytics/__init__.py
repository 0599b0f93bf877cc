"""
Analytics Package
=================
Heuristics computed from a log snapshot.

Modules:
  effectiveness      - weekly severity trend -> protocol effectiveness score
  treatment_analysis - treatments, environment, symptom frequency, protocol suggestions
"""
