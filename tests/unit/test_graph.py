import numpy as np
import pytest

from neurograph import Network, construct
from neurograph.core.activations import Activation
from neurograph.core.graph import Edge, Layer, Neuron, build_layers, connect


def test_construct_matches_requested_sizes():
    net = construct(None, 1, 2, 1)
    assert net.sizes == [1, 2, 1]
    assert net.input_size == 1
    assert net.output_size == 1
    assert net.activation is Activation.LOGISTIC


def test_input_layer_starts_with_placeholder_preset():
    net = Network.construct(3, 2, seed=0)
    for neuron in net.layers[0]:
        assert neuron.preset == 1.0
        assert neuron.bias == 0.0
        assert neuron.edges == []


def test_non_input_layers_are_fully_connected_with_random_parameters():
    net = Network.construct(3, 4, 2, seed=1)
    for depth in (1, 2):
        width = len(net.layers[depth - 1])
        for neuron in net.layers[depth]:
            assert neuron.preset is None
            assert 0.0 < neuron.bias < 1.0
            assert [edge.source for edge in neuron.edges] == list(range(width))
            assert all(0.0 < edge.weight < 1.0 for edge in neuron.edges)
            assert all(edge.pending_change == 0.0 for edge in neuron.edges)


def test_seed_makes_construction_reproducible():
    first = Network.construct(2, 3, 1, seed=42)
    second = Network.construct(2, 3, 1, seed=42)
    other = Network.construct(2, 3, 1, seed=43)
    assert first.serialize() == second.serialize()
    assert first.serialize() != other.serialize()


def test_activation_is_attached_to_every_neuron():
    net = Network.construct(2, 2, 1, activation="tanh")
    assert all(
        neuron.activation is Activation.HYPERBOLIC_TANGENT
        for layer in net.layers
        for neuron in layer
    )


@pytest.mark.parametrize("sizes", [(), (3,), (2, 0, 1), (2, -1)])
def test_invalid_sizes_are_rejected(sizes):
    with pytest.raises(ValueError):
        build_layers(sizes, Activation.LOGISTIC, np.random.default_rng(0))


def test_edge_apply_drains_pending_change():
    edge = Edge(weight=0.55, pending_change=-0.001)
    edge.apply()
    assert edge.weight == 0.55 - (-0.001)
    assert edge.pending_change == 0.0


def test_layer_helpers():
    layer = Layer([Neuron(bias=0.1, edges=[Edge(0.2), Edge(0.3)]), Neuron(bias=0.4, edges=[Edge(0.5), Edge(0.6)], preset=1.0)])
    assert len(layer) == 2
    np.testing.assert_allclose(layer.weights(), [[0.2, 0.3], [0.5, 0.6]])
    np.testing.assert_allclose(layer.biases(), [0.1, 0.4])
    assert layer.preset_mask().tolist() == [False, True]
    assert len(list(layer.edges())) == 4


def test_connect_reassigns_sources_by_position():
    layers = [
        Layer([Neuron(preset=1.0), Neuron(preset=1.0)]),
        Layer([Neuron(edges=[Edge(0.1, source=7), Edge(0.2, source=9)])]),
    ]
    connect(layers)
    assert [edge.source for edge in layers[1][0].edges] == [0, 1]


def test_connect_rejects_inconsistent_edge_counts():
    layers = [
        Layer([Neuron(preset=1.0), Neuron(preset=1.0)]),
        Layer([Neuron(edges=[Edge(0.1)])]),
    ]
    with pytest.raises(ValueError, match="preceding layer has 2"):
        connect(layers)


def test_connect_rejects_edges_into_input_layer():
    layers = [
        Layer([Neuron(preset=1.0, edges=[Edge(0.1)])]),
        Layer([Neuron(edges=[Edge(0.1)])]),
    ]
    with pytest.raises(ValueError):
        connect(layers)


def test_network_requires_two_layers():
    with pytest.raises(ValueError):
        Network([Layer([Neuron(preset=1.0)])])
