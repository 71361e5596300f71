import json

import pytest

from synapsenet.core.errors import (
    ConfigNotFoundError,
    DatasetNotFoundError,
    NetworkIOError,
    ParseError,
)
from synapsenet.core.layer import LayerShape
from synapsenet.data.config import build_layers, load_config, load_network, parse_config


def _base(**overrides):
    data = {
        "dimensions": {"width": 2, "height": 2},
        "category": ["cat", "dog"],
        "topology": {"layers": {"input": 4, "hidden": [3, 2], "output": 2}},
        "epoch": 5,
    }
    data.update(overrides)
    return data


def test_json_config_round_trip(tmp_path, config_writer):
    config = load_config(config_writer(tmp_path / "net.json", learning_rate=0.25))
    assert config.topology == [4, 3, 2]
    assert config.categories == ("cat", "dog")
    assert config.epoch == 1
    assert config.learning_rate == 0.25
    assert config.source == str(tmp_path / "net.json")


def test_yaml_config_with_scalar_hidden(tmp_path):
    path = tmp_path / "net.yaml"
    path.write_text(
        "dimensions: {width: 3, height: 1}\n"
        "category: [a, b, c]\n"
        "topology:\n"
        "  layers: {input: 3, hidden: 4, output: 3}\n"
        "epoch: 2\n"
        "activation: single_jump\n"
    )
    config = load_config(path)
    assert config.hidden_sizes == (4,)
    assert config.activation == "single_jump"
    assert config.as_dict()["dimensions"] == {"width": 3, "height": 1}


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigNotFoundError) as info:
        load_config(tmp_path / "absent.json")
    assert isinstance(info.value, NetworkIOError)


def test_malformed_json_is_parse_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ParseError):
        load_config(path)


def test_non_mapping_document_is_parse_error(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([1, 2, 3]))
    with pytest.raises(ParseError):
        load_config(path)


@pytest.mark.parametrize(
    "data",
    [
        {"topology": {"layers": {"input": 4, "hidden": [3]}}},
        _base(topology={"layers": {"input": -1, "hidden": [3], "output": 2}}),
        _base(topology={"layers": {"input": 4, "hidden": [3, "x"], "output": 2}}),
        _base(category=[]),
        _base(epoch=-2),
        _base(learning_rate="fast"),
        _base(activation="relu"),
    ],
)
def test_invalid_fields_are_parse_errors(data):
    with pytest.raises(ParseError):
        parse_config(data)


def test_parse_error_is_also_value_error():
    with pytest.raises(ValueError):
        parse_config({})


def test_dimension_mismatch_warns_and_uses_area():
    with pytest.warns(UserWarning, match="dimensions"):
        config = parse_config(_base(dimensions={"width": 3, "height": 3}))
    assert config.input_size == 9


def test_category_count_overrides_output_size():
    with pytest.warns(UserWarning, match="category"):
        config = parse_config(_base(category=["a", "b", "c"]))
    assert config.output_size == 3


def test_build_layers_shapes():
    inp, hidden, out = build_layers(parse_config(_base()))
    assert inp.shape is LayerShape.SINGLE and len(inp.primitive) == 4
    assert hidden.shape is LayerShape.GROUPED and hidden.sizes == [3, 2]
    assert out.shape is LayerShape.SINGLE and len(out.primitive) == 2


def test_load_network_primes_session(tmp_path):
    dataset = tmp_path / "data"
    dataset.mkdir()
    network = load_network(parse_config(_base()), dataset, seed=1)
    assert network.topology == [4, 3, 2, 2]
    assert network.categories == ["cat", "dog"]
    assert network.epoch == 5
    assert network.dataset == dataset


def test_load_network_without_dataset_has_no_session():
    network = load_network(parse_config(_base()), seed=1)
    assert network.dataset is None
    assert network.epoch is None


def test_load_network_missing_dataset(tmp_path):
    with pytest.raises(DatasetNotFoundError):
        load_network(parse_config(_base()), tmp_path / "nowhere")
