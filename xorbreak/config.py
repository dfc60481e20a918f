"""Engine configuration for the XOR breakers"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .error_handling import ConfigurationError
from .parallel import EXECUTORS, EXECUTOR_THREAD, WorkerPool

KEYSIZE_RANGE = (2, 40)


@dataclass
class BreakerConfig:
    """Tunable parameters of the repeating-key pipeline and its worker pool"""
    min_keysize: int = 2
    max_keysize: int = 40
    sample_blocks: int = 4          # blocks compared during keysize estimation
    keysize_candidates: int = 5     # keysizes kept for full verification
    max_workers: Optional[int] = None
    executor: str = EXECUTOR_THREAD

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range"""
        lowest, highest = KEYSIZE_RANGE
        if not lowest <= self.min_keysize <= highest:
            raise ConfigurationError(
                f"min_keysize must be between {lowest} and {highest}, got {self.min_keysize}"
            )
        if self.max_keysize > highest:
            raise ConfigurationError(f"max_keysize must be <= {highest}, got {self.max_keysize}")
        if self.max_keysize < self.min_keysize:
            raise ConfigurationError(
                f"max_keysize ({self.max_keysize}) must be >= min_keysize ({self.min_keysize})"
            )
        if self.sample_blocks < 2:
            raise ConfigurationError(f"sample_blocks must be >= 2, got {self.sample_blocks}")
        if self.keysize_candidates < 1:
            raise ConfigurationError(
                f"keysize_candidates must be >= 1, got {self.keysize_candidates}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.executor not in EXECUTORS:
            raise ConfigurationError(
                f"executor must be one of {', '.join(EXECUTORS)}, got {self.executor!r}",
                suggestion="Use 'serial' to disable parallelism."
            )

    @property
    def min_data_length(self) -> int:
        """Shortest ciphertext for which at least one keysize can be estimated"""
        return self.sample_blocks * self.min_keysize

    def create_pool(self) -> WorkerPool:
        return WorkerPool(max_workers=self.max_workers, executor=self.executor)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> 'BreakerConfig':
        """
        Build a validated config from CLI arguments or a JSON body.

        ``None`` values fall back to the defaults; unknown keys are rejected.
        """
        if not values:
            return cls()

        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            if key not in known:
                raise ConfigurationError(f"Unknown configuration option: {key}")
            if value is None:
                continue
            if key != "executor":
                try:
                    value = int(value)
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(
                        f"{key} must be an integer, got {value!r}",
                        original_exception=e
                    ) from e
            kwargs[key] = value

        return cls(**kwargs)
