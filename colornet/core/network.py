"""Fully connected sigmoid network trained one sample at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, MutableSequence, Sequence, Tuple

import numpy as np

from .activations import sigmoid, sigmoid_deriv
from .errors import DimensionMismatch, InvalidTopology, StateError
from .types import Array, ForwardTrace, ModelDescription


def _validate_topology(layer_sizes: Sequence[int]) -> list[int]:
    sizes = list(layer_sizes)
    if len(sizes) < 2:
        raise InvalidTopology(
            f"Topology needs at least an input and an output layer, got {sizes}"
        )
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise InvalidTopology(f"Layer sizes must be integers, got {size!r}")
        if size <= 0:
            raise InvalidTopology(f"Layer sizes must be positive, got {sizes}")
    return [int(size) for size in sizes]


def _as_vector(values: Iterable[float] | Array, width: int, what: str) -> Array:
    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1 or vector.shape[0] != width:
        raise DimensionMismatch(
            f"{what} must be a vector of length {width}, got shape {vector.shape}"
        )
    return vector


@dataclass
class NeuralNetwork:
    """Multilayer perceptron with sigmoid units on every layer.

    Weights for the transition ``i -> i+1`` have shape
    ``(layer_sizes[i+1], layer_sizes[i])``. Updates are applied after every
    sample using the ``(target - output)`` error sign.
    """

    layer_sizes: Sequence[int]
    learning_rate: float = 0.01
    rng: np.random.Generator | None = field(default=None, repr=False)
    weights: MutableSequence[Array] = field(init=False, repr=False)
    biases: MutableSequence[Array] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.layer_sizes = tuple(_validate_topology(self.layer_sizes))
        if not self.learning_rate > 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
        self.learning_rate = float(self.learning_rate)
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._last_trace: ForwardTrace | None = None
        self._initialise()

    def _initialise(self) -> None:
        weights: list[Array] = []
        biases: list[Array] = []
        for in_dim, out_dim in zip(self.layer_sizes[:-1], self.layer_sizes[1:]):
            scale = np.sqrt(2.0 / in_dim)
            weights.append((self.rng.random((out_dim, in_dim)) - 0.5) * scale)
            biases.append(np.zeros(out_dim, dtype=np.float64))
        self.weights = weights
        self.biases = biases

    @property
    def input_size(self) -> int:
        return self.layer_sizes[0]

    @property
    def output_size(self) -> int:
        return self.layer_sizes[-1]

    def describe(self) -> ModelDescription:
        return ModelDescription(
            layer_sizes=list(self.layer_sizes), learning_rate=self.learning_rate
        )

    # ------------------------------------------------------------------
    # Forward / backward

    def _propagate(self, inputs: Array) -> Tuple[Array, ...]:
        activations = [inputs]
        x = inputs
        for W, b in zip(self.weights, self.biases):
            x = sigmoid(W @ x + b)
            activations.append(x)
        for a in activations:
            a.setflags(write=False)
        return tuple(activations)

    def forward(self, inputs: Iterable[float] | Array) -> ForwardTrace:
        """Evaluate the network and remember the trace for :meth:`backward`."""

        x = _as_vector(inputs, self.input_size, "Input").copy()
        trace = ForwardTrace(activations=self._propagate(x))
        self._last_trace = trace
        return trace

    def backward(
        self, target: Iterable[float] | Array, trace: ForwardTrace | None = None
    ) -> None:
        """Backpropagate ``target`` through ``trace`` and update all parameters.

        When ``trace`` is omitted the result of the most recent :meth:`forward`
        call on this instance is used.
        """

        trace = trace if trace is not None else self._last_trace
        self._check_trace(trace)
        t = _as_vector(target, self.output_size, "Target")
        self._apply(self._deltas(t, trace), trace)

    def _check_trace(self, trace: ForwardTrace | None) -> None:
        if trace is None:
            raise StateError("backward() called before any forward pass")
        shapes = tuple(a.shape for a in trace.activations)
        expected = tuple((size,) for size in self.layer_sizes)
        if shapes != expected:
            raise StateError(
                f"Trace shapes {shapes} do not match topology {list(self.layer_sizes)}"
            )

    def _deltas(self, target: Array, trace: ForwardTrace) -> list[Array]:
        activations = trace.activations
        last = len(self.weights) - 1
        deltas: list[Array] = [np.empty(0)] * (last + 1)
        output = activations[-1]
        deltas[last] = (target - output) * sigmoid_deriv(output)
        for idx in reversed(range(last)):
            a = activations[idx + 1]
            deltas[idx] = (self.weights[idx + 1].T @ deltas[idx + 1]) * sigmoid_deriv(a)
        return deltas

    def _apply(self, deltas: Sequence[Array], trace: ForwardTrace) -> None:
        lr = self.learning_rate
        for idx, delta in enumerate(deltas):
            self.biases[idx] += lr * delta
            self.weights[idx] += lr * np.outer(delta, trace.activations[idx])

    # ------------------------------------------------------------------
    # Training and queries

    def train(
        self, inputs: Iterable[float] | Array, target: Iterable[float] | Array
    ) -> float:
        """Run one forward/backward step and return the pre-update MSE."""

        t = _as_vector(target, self.output_size, "Target")
        trace = self.forward(inputs)
        self.backward(t, trace)
        return float(np.mean(np.square(t - trace.output)))

    def predict(self, inputs: Iterable[float] | Array) -> Array:
        x = _as_vector(inputs, self.input_size, "Input").copy()
        return self._propagate(x)[-1].copy()

    def best_prediction(self, inputs: Iterable[float] | Array) -> int:
        # np.argmax returns the first maximum, so ties go to the lowest index.
        return int(np.argmax(self.predict(inputs)))

    def accuracy(self, test_set: Sequence[Tuple[Iterable[float] | Array, int]]) -> float:
        total = len(test_set)
        if total == 0:
            return 0.0
        correct = sum(
            1 for inputs, expected in test_set if self.best_prediction(inputs) == expected
        )
        return correct / total

    # ------------------------------------------------------------------
    # Introspection

    def state_dict(self) -> Mapping[str, Array]:
        state: dict[str, Array] = {}
        for idx, (W, b) in enumerate(zip(self.weights, self.biases)):
            state[f"W{idx}"] = W.copy()
            state[f"b{idx}"] = b.copy()
        return state

    def parameter_count(self) -> int:
        return int(sum(W.size + b.size for W, b in zip(self.weights, self.biases)))


__all__ = ["NeuralNetwork"]
