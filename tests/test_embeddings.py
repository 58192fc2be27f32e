import json

import numpy as np
import pytest

from engine.config import Config
from engine.embeddings import (
    RandomVectorGenerator,
    VectorStore,
    build_vector_table,
    write_vector_table,
)
from engine.errors import DimensionMismatch, VectorTableError

from conftest import FRUIT_VECTORS, FRUITS


def test_load_mapping_normalizes_keys():
    store = VectorStore(dim=2).load({"  Apple ": [1.0, 0.0], "BANANA": [0.8, 0.6]})

    assert len(store) == 2
    assert "apple" in store
    assert store.get("banana") is not None
    # lookups normalize too
    assert np.allclose(store.get(" APPLE"), [1.0, 0.0])
    assert store.source == "mapping"


def test_get_missing_never_raises(fruit_store):
    assert fruit_store.get("kiwi") is None
    assert fruit_store.get("") is None
    assert fruit_store.get(None) is None
    assert 42 not in fruit_store


def test_load_rejects_wrong_dimension():
    with pytest.raises(DimensionMismatch) as exc:
        VectorStore(dim=2).load({"apple": [1.0, 0.0], "pear": [1.0, 0.0, 0.0]})
    assert exc.value.word == "pear"


def test_failed_load_keeps_previous_vectors(fruit_store):
    with pytest.raises(DimensionMismatch):
        fruit_store.load({"pear": [1.0]})
    assert len(fruit_store) == 4
    assert "pear" not in fruit_store


def test_load_json_table(tmp_path):
    path = tmp_path / "word_vectors.json"
    path.write_text(json.dumps(FRUIT_VECTORS), encoding="utf-8")

    store = VectorStore(dim=2).load(path)

    assert sorted(store.words()) == sorted(FRUITS)
    assert store.source == str(path)


def test_load_npy_pair(tmp_path):
    """directory with words.json + embeddings_normed.npy."""
    (tmp_path / "words.json").write_text(json.dumps(["apple", "banana"]), encoding="utf-8")
    np.save(tmp_path / "embeddings_normed.npy", np.array([[1.0, 0.0], [0.8, 0.6]], dtype=np.float32))

    store = VectorStore(dim=2).load(tmp_path)

    assert len(store) == 2
    assert np.allclose(store.get("banana"), [0.8, 0.6])


def test_load_npy_pair_shape_mismatch(tmp_path):
    (tmp_path / "words.json").write_text(json.dumps(["apple", "banana", "cherry"]), encoding="utf-8")
    np.save(tmp_path / "embeddings_normed.npy", np.zeros((2, 2), dtype=np.float32))

    with pytest.raises(VectorTableError):
        VectorStore(dim=2).load(tmp_path)


def test_malformed_json_table(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(VectorTableError):
        VectorStore(dim=2).load(bad)

    wrong_shape = tmp_path / "list.json"
    wrong_shape.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(VectorTableError):
        VectorStore(dim=2).load(wrong_shape)


def test_missing_table_file(tmp_path):
    with pytest.raises(VectorTableError):
        VectorStore(dim=2).load(tmp_path / "nope.json")


def test_ensure_initialized_fills_every_word():
    """
    the fallback path: placeholder vectors for every dictionary word.
    only structure is checked here, the values are noise.
    """
    store = VectorStore(dim=8, fallback=RandomVectorGenerator(seed=1))

    generated = store.ensure_initialized(["xin chào", "Con Mèo", "", "con mèo"])

    assert generated is True
    assert store.source == "fallback"
    assert sorted(store.words()) == ["con mèo", "xin chào"]
    assert all(store.get(w).shape == (8,) for w in store.words())


def test_ensure_initialized_is_idempotent():
    store = VectorStore(dim=4, fallback=RandomVectorGenerator(seed=1))
    store.ensure_initialized(["a", "b"])
    before = store.get("a").copy()

    assert store.ensure_initialized(["a", "b", "c"]) is False
    assert len(store) == 2
    assert np.array_equal(store.get("a"), before)


def test_ensure_initialized_noop_when_loaded(fruit_store):
    assert fruit_store.ensure_initialized(["kiwi", "mango"]) is False
    assert "kiwi" not in fruit_store
    assert len(fruit_store) == 4


def test_fallback_generator_rejects_bad_dimension():
    store = VectorStore(dim=3, fallback=lambda word, dim: np.zeros(dim + 1))
    with pytest.raises(DimensionMismatch):
        store.ensure_initialized(["a"])


def test_random_generator_seeded():
    a = RandomVectorGenerator(seed=9)("x", 10)
    b = RandomVectorGenerator(seed=9)("x", 10)
    assert np.array_equal(a, b)
    assert a.dtype == np.float32
    assert np.all((a >= -1.0) & (a < 1.0))


def test_clear():
    store = VectorStore(dim=2).load(FRUIT_VECTORS)
    store.clear()
    assert len(store) == 0
    assert store.source is None


def test_from_config_prefers_json_table(tmp_path):
    (tmp_path / "word_vectors.json").write_text(json.dumps({"apple": [1.0, 0.0]}), encoding="utf-8")
    (tmp_path / "words.json").write_text(json.dumps(["banana"]), encoding="utf-8")
    np.save(tmp_path / "embeddings_normed.npy", np.array([[0.8, 0.6]], dtype=np.float32))

    store = VectorStore.from_config(Config(embed_dim=2, data_dir=tmp_path))

    assert store.words() == ["apple"]


def test_from_config_uses_npy_pair(tmp_path):
    (tmp_path / "words.json").write_text(json.dumps(["banana"]), encoding="utf-8")
    np.save(tmp_path / "embeddings_normed.npy", np.array([[0.8, 0.6]], dtype=np.float32))

    store = VectorStore.from_config(Config(embed_dim=2, data_dir=tmp_path))

    assert store.words() == ["banana"]


def test_from_config_without_tables(tmp_path):
    store = VectorStore.from_config(Config(embed_dim=2, data_dir=tmp_path, seed=4))
    assert len(store) == 0
    assert store.dim == 2


def test_write_vector_table(tmp_path):
    path = tmp_path / "out" / "word_vectors.json"
    count = write_vector_table(VectorStore(dim=2).load(FRUIT_VECTORS), path)

    assert count == 4
    with open(path, "r", encoding="utf-8") as f:
        table = json.load(f)
    assert table["banana"] == pytest.approx([0.8, 0.6])


def test_build_vector_table(tmp_path):
    glove = tmp_path / "vectors.txt"
    glove.write_text(
        "\n".join([
            "apple 1.0 0.0",
            "xin chào 0.5 0.5",
            "kiwi 0.3 0.3",
            "broken 1.0",
            "banana 0.8 oops",
            "APPLE 9.0 9.0",
        ]) + "\n",
        encoding="utf-8",
    )

    table = build_vector_table(glove, ["apple", "Xin Chào", "banana"], expected_dim=2)

    # kiwi isn't in the dictionary, banana's line is malformed,
    # and the first apple line wins
    assert table == {"apple": [1.0, 0.0], "xin chào": [0.5, 0.5]}


@pytest.mark.parametrize("row", [[1.0, "x"], [[1.0, 0.0]], [None, 0.0], "ab"])
def test_malformed_row_is_a_table_error(tmp_path, row):
    """non-numeric or nested rows are rejected, not coerced."""
    path = tmp_path / "word_vectors.json"
    path.write_text(json.dumps({"apple": row}), encoding="utf-8")

    with pytest.raises(VectorTableError) as exc:
        VectorStore(dim=2).load(path)
    assert "apple" in str(exc.value)
