"""Domain-oriented observability infrastructure.

This module provides domain probes following the Domain Oriented Observability
pattern described by Martin Fowler. Domain probes encapsulate instrumentation
details and provide a clean, domain-focused API for observability.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from shared_kernel.observability_context import ObservationContext
from infrastructure.observability.data_gate_probe import (
    DataGateProbe,
    DefaultDataGateProbe,
)
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from infrastructure.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)

__all__ = [
    "ConnectionProbe",
    "DataGateProbe",
    "DefaultConnectionProbe",
    "DefaultDataGateProbe",
    "DefaultTenantContextProbe",
    "ObservationContext",
    "TenantContextProbe",
]
