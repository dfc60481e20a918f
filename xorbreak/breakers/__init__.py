"""XOR key-recovery breakers"""

from .single_byte import SingleByteBreaker, break_single_byte, run_trials
from .repeating_key import RepeatingKeyBreaker, break_repeating_key

__all__ = [
    'SingleByteBreaker',
    'break_single_byte',
    'run_trials',
    'RepeatingKeyBreaker',
    'break_repeating_key'
]
