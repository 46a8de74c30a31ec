"""Coverage Bounded Context.

Responsible for deriving antenna coverage from installation parameters:
- Value Objects: Coverage
- Services: compute_coverage
"""
