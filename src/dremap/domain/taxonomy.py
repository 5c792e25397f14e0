"""Reporting category taxonomy.

The set of categories an account can be mapped to is closed: it is defined
once here and has no runtime mutation path. Membership is exact and
case-sensitive; :func:`normalize_category` exists for ingestion edges that
receive free-text labels and must be asked for explicitly.
"""

import unicodedata
from enum import Enum
from typing import Optional

from dremap.domain.errors import UnknownCategoryError


class Category(str, Enum):
    """Report line category, in display order."""

    ADIANTAMENTOS = "Adiantamentos"
    CLIENTES = "Clientes"
    CONTAS_A_PAGAR_CP = "Contas A Pagar Cp"
    CUSTOS_DAS_VENDAS = "Custos Das Vendas"
    DEDUCOES = "Deduções"
    DEPRECIACAO_E_AMORTIZACAO = "Depreciação e Amortização"
    DESPESAS_ADMINISTRATIVAS = "Despesas Administrativas"
    DESPESAS_ANTECIPADAS = "Despesas Antecipadas"
    DESPESAS_COMERCIAIS = "Despesas Comerciais"
    DESPESAS_FINANCEIRAS = "Despesas Financeiras"
    DESPESAS_TRIBUTARIAS = "Despesas Tributarias"
    DISPONIVEL = "Disponivel"
    EMPRESTIMOS_E_FINANCIAMENTOS_CP = "Emprestimos E Financiamentos Cp"
    ESTOQUES = "Estoques"
    FORNECEDORES = "Fornecedores"
    IMOBILIZADO = "Imobilizado"
    INTANGIVEL = "Intangivel"
    IRPJ_E_CSLL = "Irpj E Csll"
    OBRIGACOES_TRABALHISTAS = "Obrigacoes Trabalhistas"
    OBRIGACOES_TRIBUTARIAS = "Obrigacoes Tributarias"
    OUTRAS_CONTAS_A_PAGAR_LP = "Outras Contas A Pagar Lp"
    OUTRAS_CONTAS_A_RECEBER_LP = "Outras Contas A Receber Lp"
    OUTRAS_DESPESAS = "Outras Despesas"
    OUTRAS_RECEITAS = "Outras Receitas"
    PARCELAMENTOS_CP = "Parcelamentos Cp"
    PARCELAMENTOS_LP = "Parcelamentos Lp"
    PROCESSOS_JUDICIAIS = "Processos Judiciais"
    RECEITA_BRUTA = "Receita Bruta"
    RECEITAS_FINANCEIRAS = "Receitas Financeiras"
    RESERVA_DE_LUCROS = "Reserva De Lucros"
    RESULTADO_DO_EXERCICIO = "Resultado Do Exercicio"
    TRIBUTOS_A_COMPENSAR_CP = "Tributos A CompensarCP"

    def __str__(self) -> str:
        return self.value


_LABELS = frozenset(category.value for category in Category)


def list_categories() -> tuple[Category, ...]:
    """Return every category in display order."""
    return tuple(Category)


def is_valid_category(label: str) -> bool:
    """Return True if ``label`` is exactly a category label."""
    return isinstance(label, str) and label in _LABELS


def require_category(label: str) -> Category:
    """Resolve a label to its category.

    Surrounding whitespace is ignored; everything else must match exactly.

    Raises:
        UnknownCategoryError: If the label is not in the taxonomy
    """
    cleaned = label.strip() if isinstance(label, str) else ""
    if not is_valid_category(cleaned):
        raise UnknownCategoryError(label if isinstance(label, str) else str(label))
    return Category(cleaned)


# Keys are lowercase without diacritics
CATEGORY_ALIASES: dict[str, Category] = {
    # Receitas
    "receita bruta": Category.RECEITA_BRUTA,
    "receitas bruta": Category.RECEITA_BRUTA,
    "receita de vendas": Category.RECEITA_BRUTA,
    "receitas de vendas": Category.RECEITA_BRUTA,
    # Deducoes
    "deducoes": Category.DEDUCOES,
    "deducao": Category.DEDUCOES,
    "deducoes de vendas": Category.DEDUCOES,
    "deducao de vendas": Category.DEDUCOES,
    "devolucoes": Category.DEDUCOES,
    "devolucao": Category.DEDUCOES,
    # Custos
    "custos das vendas": Category.CUSTOS_DAS_VENDAS,
    "custos da vendas": Category.CUSTOS_DAS_VENDAS,
    "custo das vendas": Category.CUSTOS_DAS_VENDAS,
    "custo da vendas": Category.CUSTOS_DAS_VENDAS,
    "custo de mercadoria vendida": Category.CUSTOS_DAS_VENDAS,
    "cmv": Category.CUSTOS_DAS_VENDAS,
    # Despesas
    "despesas administrativas": Category.DESPESAS_ADMINISTRATIVAS,
    "despesa administrativa": Category.DESPESAS_ADMINISTRATIVAS,
    "despesas admin": Category.DESPESAS_ADMINISTRATIVAS,
    "despesas comerciais": Category.DESPESAS_COMERCIAIS,
    "despesa comercial": Category.DESPESAS_COMERCIAIS,
    "despesas de vendas": Category.DESPESAS_COMERCIAIS,
    "despesas financeiras": Category.DESPESAS_FINANCEIRAS,
    "despesa financeira": Category.DESPESAS_FINANCEIRAS,
    "juros": Category.DESPESAS_FINANCEIRAS,
    "despesas tributarias": Category.DESPESAS_TRIBUTARIAS,
    "despesa tributaria": Category.DESPESAS_TRIBUTARIAS,
    "outras despesas": Category.OUTRAS_DESPESAS,
    "outra despesa": Category.OUTRAS_DESPESAS,
    "despesas diversas": Category.OUTRAS_DESPESAS,
    "despesa diversa": Category.OUTRAS_DESPESAS,
    "despesas antecipadas": Category.DESPESAS_ANTECIPADAS,
    "despesa antecipada": Category.DESPESAS_ANTECIPADAS,
    "depreciacao e amortizacao": Category.DEPRECIACAO_E_AMORTIZACAO,
    "depreciacoes": Category.DEPRECIACAO_E_AMORTIZACAO,
    "amortizacoes": Category.DEPRECIACAO_E_AMORTIZACAO,
    "depreciacao": Category.DEPRECIACAO_E_AMORTIZACAO,
    "amortizacao": Category.DEPRECIACAO_E_AMORTIZACAO,
    # Receitas financeiras e outras
    "receitas financeiras": Category.RECEITAS_FINANCEIRAS,
    "receita financeira": Category.RECEITAS_FINANCEIRAS,
    "rendimentos": Category.RECEITAS_FINANCEIRAS,
    "outras receitas": Category.OUTRAS_RECEITAS,
    "outra receita": Category.OUTRAS_RECEITAS,
    # Tributos sobre o lucro
    "irpj e csll": Category.IRPJ_E_CSLL,
    "imposto de renda": Category.IRPJ_E_CSLL,
    "contribuicao social": Category.IRPJ_E_CSLL,
    # Ativo
    "disponivel": Category.DISPONIVEL,
    "disponibilidades": Category.DISPONIVEL,
    "caixa": Category.DISPONIVEL,
    "bancos": Category.DISPONIVEL,
    "clientes": Category.CLIENTES,
    "contas a receber": Category.CLIENTES,
    "duplicatas a receber": Category.CLIENTES,
    "estoques": Category.ESTOQUES,
    "estoque": Category.ESTOQUES,
    "mercadorias": Category.ESTOQUES,
    "imobilizado": Category.IMOBILIZADO,
    "ativo imobilizado": Category.IMOBILIZADO,
    "bens e direitos": Category.IMOBILIZADO,
    "intangivel": Category.INTANGIVEL,
    "adiantamentos": Category.ADIANTAMENTOS,
    "adiantamento": Category.ADIANTAMENTOS,
    "tributos a compensarcp": Category.TRIBUTOS_A_COMPENSAR_CP,
    "tributos a compensar cp": Category.TRIBUTOS_A_COMPENSAR_CP,
    "outras contas a receber lp": Category.OUTRAS_CONTAS_A_RECEBER_LP,
    "outras contas a receber longo prazo": Category.OUTRAS_CONTAS_A_RECEBER_LP,
    # Passivo
    "fornecedores": Category.FORNECEDORES,
    "contas a pagar": Category.FORNECEDORES,
    "contas a pagar cp": Category.CONTAS_A_PAGAR_CP,
    "contas a pagar curto prazo": Category.CONTAS_A_PAGAR_CP,
    "emprestimos e financiamentos cp": Category.EMPRESTIMOS_E_FINANCIAMENTOS_CP,
    "emprestimo e financiamento cp": Category.EMPRESTIMOS_E_FINANCIAMENTOS_CP,
    "emprestimos cp": Category.EMPRESTIMOS_E_FINANCIAMENTOS_CP,
    "parcelamentos cp": Category.PARCELAMENTOS_CP,
    "parcelamento cp": Category.PARCELAMENTOS_CP,
    "parcelamentos lp": Category.PARCELAMENTOS_LP,
    "parcelamento lp": Category.PARCELAMENTOS_LP,
    "obrigacoes trabalhistas": Category.OBRIGACOES_TRABALHISTAS,
    "salarios a pagar": Category.OBRIGACOES_TRABALHISTAS,
    "encargos trabalhistas": Category.OBRIGACOES_TRABALHISTAS,
    "obrigacoes tributarias": Category.OBRIGACOES_TRIBUTARIAS,
    "impostos a pagar": Category.OBRIGACOES_TRIBUTARIAS,
    "outras contas a pagar lp": Category.OUTRAS_CONTAS_A_PAGAR_LP,
    "outras contas a pagar longo prazo": Category.OUTRAS_CONTAS_A_PAGAR_LP,
    "processos judiciais": Category.PROCESSOS_JUDICIAIS,
    "processo judicial": Category.PROCESSOS_JUDICIAIS,
    "contingencias": Category.PROCESSOS_JUDICIAIS,
    # Patrimonio liquido
    "reserva de lucros": Category.RESERVA_DE_LUCROS,
    "reservas": Category.RESERVA_DE_LUCROS,
    "resultado do exercicio": Category.RESULTADO_DO_EXERCICIO,
    "lucro do exercicio": Category.RESULTADO_DO_EXERCICIO,
}


def fold_label(text: str) -> str:
    """Lowercase, trim and strip diacritics ("Deduções" -> "deducoes")."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.lower().split())


def normalize_category(label: Optional[str]) -> Optional[Category]:
    """Resolve a free-text label to a category.

    Exact labels resolve to themselves; otherwise the label is folded and
    looked up in :data:`CATEGORY_ALIASES`.

    Args:
        label: Free-text category label (e.g., "CMV", "deducoes")

    Returns:
        Matching category, or None if the label is unknown
    """
    if not label or not label.strip():
        return None

    cleaned = label.strip()
    if is_valid_category(cleaned):
        return Category(cleaned)

    return CATEGORY_ALIASES.get(fold_label(cleaned))
