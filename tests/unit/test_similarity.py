import pytest

from docintel.retrieval.similarity import cosine_similarity


class TestCosineSimilarity:
    def test_self_similarity_is_one(self) -> None:
        v = [0.3, -1.2, 4.5, 0.0]
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_is_symmetric(self) -> None:
        a = [1.0, 2.0, 3.0]
        b = [-0.5, 4.0, 0.25]
        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_orthogonal_vectors(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self) -> None:
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_zero_vector_returns_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="mismatch"):
            cosine_similarity([1.0, 2.0], [1.0])
