"""Prompt text and canned analyses (pt-BR, as shown to end users)."""

from __future__ import annotations

from typing import Mapping, Optional

SYSTEM_PROMPT = (
    "Você é um assistente de bem-estar que produz recomendações práticas e passo-a-passo."
)

# Returned verbatim when no API key is configured
DEMO_ANALYSIS = (
    "RELATÓRIO DE EXEMPLO:\n"
    "- Avaliação geral: Sono regular, necessidade de aumento de atividade física.\n"
    "- 5 recomendações práticas: Estabelecer rotina de sono; Exercício 30 min 3x/semana; "
    "Planejar refeições; Hidratar; Pausas ativas.\n"
    "(Defina OPENAI_API_KEY para análises reais)"
)

# Substituted when the provider call fails
FALLBACK_ANALYSIS = (
    "Não foi possível obter análise da IA. Aqui está um relatório de fallback:\n"
    "- Rotina de sono\n"
    "- Exercício regular\n"
    "- Alimentação equilibrada\n"
    "- Hidratação\n"
    "- Pausas durante o trabalho"
)


def build_user_prompt(name: str, email: Optional[str], answers: Mapping[str, str]) -> str:
    """Render the submission into the user message, one ``- question: answer`` per line."""
    lines = [f"Usuario: {name}", f"Email: {email or ''}", "Respostas:"]
    lines.extend(f"- {question}: {answer}" for question, answer in answers.items())
    prompt = "\n".join(lines) + "\n"
    return prompt + "\nGere um relatório com análise breve e 5 recomendações práticas."
