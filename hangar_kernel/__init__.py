"""
Hangar Kernel

Domain values, result types, clock, typed exceptions, structured logging
and database plumbing shared by the hangar delivery reconciliation layers:
- Immutable, validated value objects for assets, container logs and deliveries
- Explicit fetch results (success or failure with reason)
- Injectable clock for deterministic tests
"""

__version__ = "0.1.0"
