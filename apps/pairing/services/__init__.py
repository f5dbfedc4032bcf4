"""Services for pairing riders and partners."""

from .exceptions import (
    PairingServiceError,
    InvalidPairingCodeError,
    RiderNotFoundError,
    NotPairedError,
)
from .code_generation import (
    generate_pairing_code,
    assign_pairing_code,
    regenerate_pairing_code,
)
from .pairing_resolution import (
    normalize_code,
    find_rider_by_code,
    pair_with_rider,
    unpair,
    get_paired_partners,
    require_paired_rider,
)

__all__ = [
    # Exceptions
    'PairingServiceError',
    'InvalidPairingCodeError',
    'RiderNotFoundError',
    'NotPairedError',
    # Code generation
    'generate_pairing_code',
    'assign_pairing_code',
    'regenerate_pairing_code',
    # Pairing
    'normalize_code',
    'find_rider_by_code',
    'pair_with_rider',
    'unpair',
    'get_paired_partners',
    'require_paired_rider',
]
