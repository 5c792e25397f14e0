"""Tests for the category taxonomy."""

import pytest

from dremap.domain.errors import UnknownCategoryError
from dremap.domain.taxonomy import (
    Category,
    fold_label,
    is_valid_category,
    list_categories,
    normalize_category,
    require_category,
)


def test_list_categories():
    """Test that the taxonomy holds every category once."""
    categories = list_categories()

    assert len(categories) == 32
    assert len(set(categories)) == 32
    assert Category.RECEITA_BRUTA in categories
    assert Category.DEDUCOES in categories


def test_category_is_string():
    """Test that categories compare and print as their labels."""
    assert Category.DEDUCOES == "Deduções"
    assert str(Category.DEPRECIACAO_E_AMORTIZACAO) == "Depreciação e Amortização"


@pytest.mark.parametrize(
    "label",
    ["Receita Bruta", "Deduções", "Custos Das Vendas", "Tributos A CompensarCP"],
)
def test_is_valid_category(label):
    """Test exact labels are valid."""
    assert is_valid_category(label)


@pytest.mark.parametrize(
    "label",
    ["receita bruta", "Deducoes", "RECEITA BRUTA", " Receita Bruta", "", "Lucro"],
)
def test_is_valid_category_is_exact(label):
    """Test membership is case- and accent-sensitive."""
    assert not is_valid_category(label)


def test_is_valid_category_non_string():
    """Test non-string labels are rejected."""
    assert not is_valid_category(None)
    assert not is_valid_category(42)


def test_require_category():
    """Test resolving labels with surrounding whitespace."""
    assert require_category("Receita Bruta") is Category.RECEITA_BRUTA
    assert require_category("  Deduções ") is Category.DEDUCOES


def test_require_category_unknown():
    """Test that unknown labels raise UnknownCategoryError."""
    with pytest.raises(UnknownCategoryError) as exc_info:
        require_category("Lucro Bruto")

    assert exc_info.value.label == "Lucro Bruto"
    assert "Unknown category 'Lucro Bruto'" in str(exc_info.value)


def test_fold_label():
    """Test folding strips case, accents and extra spaces."""
    assert fold_label("Deduções") == "deducoes"
    assert fold_label("  Depreciação   e Amortização ") == "depreciacao e amortizacao"


@pytest.mark.parametrize(
    "label,expected",
    [
        ("Receita Bruta", Category.RECEITA_BRUTA),
        ("receita bruta", Category.RECEITA_BRUTA),
        ("CMV", Category.CUSTOS_DAS_VENDAS),
        ("deducoes", Category.DEDUCOES),
        ("Deduções de Vendas", Category.DEDUCOES),
        ("Juros", Category.DESPESAS_FINANCEIRAS),
        ("depreciação", Category.DEPRECIACAO_E_AMORTIZACAO),
    ],
)
def test_normalize_category(label, expected):
    """Test free-text labels resolve through aliases."""
    assert normalize_category(label) is expected


@pytest.mark.parametrize("label", [None, "", "   ", "Lucro Bruto"])
def test_normalize_category_unknown(label):
    """Test that unresolvable labels return None."""
    assert normalize_category(label) is None
