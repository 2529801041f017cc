from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bignat")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .cancel import CancelToken
from .config import load_default_settings, load_settings
from .errors import (
    BigNatError,
    Cancelled,
    ConfigError,
    DivisionByZero,
    InvalidArgument,
    InvalidCallbackResult,
    InvalidRange,
    NotFound,
    ParseError,
    RangeError,
    Underflow,
)
from .euler_phi import calculate_euler_phi, calculate_euler_phi_factors, calculate_euler_phi_prime_power
from .multiplicative_order import (
    calculate_multiplicative_order,
    calculate_multiplicative_order_crt,
    calculate_multiplicative_order_crt_factors,
    calculate_multiplicative_order_naive,
    calculate_multiplicative_order_prime_power,
)
from .natural import BigNat
from .polynomial import BigPoly
from .primality import (
    AKSParameters,
    ArtjuhovResult,
    FermatResult,
    calculate_aks_modulus,
    get_aks_parameters_simple,
    get_aks_upper_bound_simple,
    get_artjuhov_witness_bound,
    has_artjuhov_witness,
    has_fermat_witness,
    is_aks_witness,
    is_prime_by_aks,
    is_prime_by_miller,
    is_probable_prime,
    test_compositeness_by_artjuhov,
    test_compositeness_by_fermat,
)
from .runtime import APPLY, CFG
from .trial_division import (
    Mod30WheelDivisorGenerator,
    NaiveDivisorGenerator,
    PrimeFactor,
    default_factorizer,
    factorize,
    get_factors,
    make_factorizer,
    trial_divide,
)

__all__ = [
    "APPLY",
    "CFG",
    "AKSParameters",
    "ArtjuhovResult",
    "BigNat",
    "BigNatError",
    "BigPoly",
    "CancelToken",
    "Cancelled",
    "ConfigError",
    "DivisionByZero",
    "FermatResult",
    "InvalidArgument",
    "InvalidCallbackResult",
    "InvalidRange",
    "Mod30WheelDivisorGenerator",
    "NaiveDivisorGenerator",
    "NotFound",
    "ParseError",
    "PrimeFactor",
    "RangeError",
    "Underflow",
    "__version__",
    "calculate_aks_modulus",
    "calculate_euler_phi",
    "calculate_euler_phi_factors",
    "calculate_euler_phi_prime_power",
    "calculate_multiplicative_order",
    "calculate_multiplicative_order_crt",
    "calculate_multiplicative_order_crt_factors",
    "calculate_multiplicative_order_naive",
    "calculate_multiplicative_order_prime_power",
    "default_factorizer",
    "factorize",
    "get_aks_parameters_simple",
    "get_aks_upper_bound_simple",
    "get_artjuhov_witness_bound",
    "get_factors",
    "has_artjuhov_witness",
    "has_fermat_witness",
    "is_aks_witness",
    "is_prime_by_aks",
    "is_prime_by_miller",
    "is_probable_prime",
    "load_default_settings",
    "load_settings",
    "make_factorizer",
    "test_compositeness_by_artjuhov",
    "test_compositeness_by_fermat",
    "trial_divide",
]
