import numpy as np
import pytest

from colornet.colors import Color
from colornet.core.errors import InvalidTopology
from colornet.pixels import InvalidPixel, Pixel
from colornet.training.system import ColorRecognitionSystem

PRIMARIES = {"Red": (255, 0, 0), "Green": (0, 255, 0), "Blue": (0, 0, 255)}


class _Capture:
    def __init__(self) -> None:
        self.history = []

    def on_epoch(self, epoch, metrics):
        self.history.append((epoch, dict(metrics)))


class _ScriptedNetwork:
    """Names a sample correctly only right after being trained on it."""

    layer_sizes = (3, 16, 3)

    def __init__(self) -> None:
        self.seen = []
        self._last = None

    def train(self, inputs, target):
        self.seen.append(inputs)
        self._last = (inputs, int(np.argmax(target)))
        return 0.0

    def best_prediction(self, inputs):
        if self._last is not None and inputs is self._last[0]:
            return self._last[1]
        return -1


@pytest.fixture(scope="module")
def trained_primaries():
    system = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(0))
    system.train(50, 100)
    return system


def test_trained_system_recognises_pure_red(trained_primaries):
    system = trained_primaries
    assert system.network.layer_sizes == (3, 16, 3)
    pixel = Pixel(255, 0, 0)
    assert system.best_prediction_label(pixel) == "Red"
    scores = system.predict(pixel)
    assert scores["Red"] > scores["Green"]
    assert scores["Red"] > scores["Blue"]


def test_training_history_is_recorded(trained_primaries):
    history = trained_primaries.training_history
    assert [record.epoch for record in history] == list(range(1, 51))
    assert history[-1].loss < history[0].loss
    assert all(0.0 <= record.accuracy <= 1.0 for record in history)
    assert history[-1].accuracy > 0.9


def test_test_accuracy_on_primaries(trained_primaries):
    assert trained_primaries.test_accuracy(30) > 0.8


def test_predict_follows_palette_order(trained_primaries):
    scores = trained_primaries.predict(Pixel(10, 200, 30))
    assert list(scores) == ["Red", "Green", "Blue"]
    assert all(0.0 < value < 1.0 for value in scores.values())
    assert trained_primaries.best_prediction_label(Pixel(10, 200, 30)) == "Green"


def test_generate_training_set_size_and_targets():
    system = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(1))
    samples = system.generate_training_set(10)
    assert len(samples) == 30
    for label_index, rgb in enumerate(PRIMARIES.values()):
        group = [s for s in samples if s.label_index == label_index]
        assert len(group) == 10
        exact = [s for s in group if np.array_equal(s.inputs, np.asarray(rgb) / 255.0)]
        assert len(exact) >= 3
        assert all(s.target[label_index] == 1.0 and s.target.sum() == 1.0 for s in group)


def test_callbacks_receive_epoch_metrics():
    capture = _Capture()
    calls = []
    system = ColorRecognitionSystem(
        PRIMARIES,
        rng=np.random.default_rng(2),
        callbacks=[capture, lambda epoch, metrics: calls.append(epoch)],
    )
    records = system.train(3, 10)
    assert [epoch for epoch, _ in capture.history] == [1, 2, 3]
    assert calls == [1, 2, 3]
    assert set(capture.history[0][1]) == {"loss", "accuracy"}
    assert capture.history[-1][1]["loss"] == pytest.approx(records[-1].loss)

    more = system.train(2, 10)
    assert [r.epoch for r in more] == [4, 5]
    assert len(system.training_history) == 5


def test_seeded_systems_train_identically():
    a = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(8))
    b = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(8))
    assert a.train(2, 10) == b.train(2, 10)


def test_train_with_no_samples_records_nothing():
    system = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(0))
    assert system.train(5, 0) == []
    assert system.training_history == ()


def test_full_palette_topology():
    system = ColorRecognitionSystem(Color.palette(), rng=np.random.default_rng(0))
    assert system.network.layer_sizes == (3, 16, 8)
    assert system.labels[0] == "Red" and system.labels[-1] == "White"


def test_custom_hidden_size_and_learning_rate():
    system = ColorRecognitionSystem(PRIMARIES, hidden_size=8, learning_rate=0.1)
    assert system.network.layer_sizes == (3, 8, 3)
    assert system.network.learning_rate == 0.1


def test_invalid_palettes():
    with pytest.raises(InvalidTopology):
        ColorRecognitionSystem({})
    with pytest.raises(InvalidPixel):
        ColorRecognitionSystem({"Hot": (300, 0, 0)})
    with pytest.raises(TypeError):
        ColorRecognitionSystem({"Odd": 42})


def test_training_accuracy_is_scored_after_the_update():
    system = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(4))
    system.network = _ScriptedNetwork()
    records = system.train(2, 10)
    assert [record.accuracy for record in records] == [1.0, 1.0]


def test_generated_training_set_is_shuffled():
    system = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(4))
    samples = system.generate_training_set(10)
    order = [sample.label_index for sample in samples]
    assert sorted(order) == [0] * 10 + [1] * 10 + [2] * 10
    assert order != sorted(order)


def test_each_epoch_reshuffles_the_samples():
    system = ColorRecognitionSystem(PRIMARIES, rng=np.random.default_rng(4))
    network = _ScriptedNetwork()
    system.network = network
    system.train(2, 10)
    first = [id(inputs) for inputs in network.seen[:30]]
    second = [id(inputs) for inputs in network.seen[30:]]
    assert len(second) == 30
    assert set(first) == set(second)
    assert first != second
