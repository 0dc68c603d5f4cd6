"""
Base class for partitioning algorithms.

Holds the configuration plumbing shared by partitioners: parameter storage,
sklearn-style get_params/set_params, verbosity and the random source.
"""

from typing import Optional, Dict, Any, Union
import inspect
import numbers
import torch

from .interfaces import Partitioner
from .exceptions import InvalidConfiguration
from ..utils.validation import check_random_state


class BasePartitioner(Partitioner):
    """Configuration skeleton for partitioners.

    Subclasses implement `partition(points, k, generator=None)`. Each call must
    build its own mutable state so one instance can serve concurrent calls.
    """

    def __init__(self,
                 max_iter: int = 96,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            max_iter: Maximum iterations
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed (fresh generator per call, reproducible),
                generator (shared stream) or None (non-deterministic)
        """
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state
        BasePartitioner._validate_params(self)

    def _validate_params(self) -> None:
        """Check the current parameter values; subclasses extend this.

        Raises:
            InvalidConfiguration: If a value is out of range
        """
        if not isinstance(self.max_iter, numbers.Integral) or isinstance(self.max_iter, bool):
            raise TypeError(f"max_iter must be int, got {type(self.max_iter)}")
        if self.max_iter < 1:
            raise InvalidConfiguration(f"max_iter must be positive, got {self.max_iter}")

    def _get_generator(self, generator: Optional[torch.Generator] = None) -> torch.Generator:
        """Random source for one call; an explicit generator wins."""
        if generator is not None:
            return generator
        return check_random_state(self.random_state)

    @classmethod
    def _param_names(cls):
        names = []
        for klass in cls.__mro__:
            init = klass.__dict__.get('__init__')
            if init is None:
                continue
            for name, param in inspect.signature(init).parameters.items():
                if name == 'self' or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                    continue
                if name not in names:
                    names.append(name)
        return names

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {name: getattr(self, name) for name in self._param_names()
                if hasattr(self, name)}

    def set_params(self, **params) -> 'BasePartitioner':
        """Set parameters (sklearn compatibility).

        Values are validated like constructor arguments; on failure the
        previous values are restored.
        """
        valid = set(self._param_names())
        for key in params:
            if key not in valid:
                raise ValueError(f"Invalid parameter {key} for {type(self).__name__}")

        previous = {key: getattr(self, key) for key in params}
        for key, value in params.items():
            setattr(self, key, value)
        try:
            self._validate_params()
        except (TypeError, ValueError):
            for key, value in previous.items():
                setattr(self, key, value)
            raise
        return self

    def __repr__(self) -> str:
        params = ', '.join(f'{k}={v!r}' for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"
