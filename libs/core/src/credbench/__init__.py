from .interfaces import BigNumBackend
from .registry import registry
from .errors import CredBenchError, PrimitiveFailure, StatisticsUndefined
from .metrics import StatsAccumulator, MeanStd, PhaseSeries
from .cputime import CpuCheckpoint, cpu_window
from .qr_sampler import QuadraticResidueSampler
from .creddef import CredentialMaterial, CredentialMaterialGenerator, PhaseTimings
from .params import SAFE_PRIME_BITS, DEFAULT_BACKEND

__all__ = [
    "BigNumBackend",
    "registry",
    "CredBenchError",
    "PrimitiveFailure",
    "StatisticsUndefined",
    "StatsAccumulator",
    "MeanStd",
    "PhaseSeries",
    "CpuCheckpoint",
    "cpu_window",
    "QuadraticResidueSampler",
    "CredentialMaterial",
    "CredentialMaterialGenerator",
    "PhaseTimings",
    "SAFE_PRIME_BITS",
    "DEFAULT_BACKEND",
]
