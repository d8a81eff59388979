"""Static English → Portuguese (Brazil) label table for display and export.

Translation is a display concern only: helpers return new values and never
touch :class:`CanonicalRecord` instances.
"""

from __future__ import annotations

DICTIONARY: dict[str, str] = {
    # Headers
    "Subscription ID": "ID da Assinatura",
    "Request Type": "Tipo de Requisição",
    "VM Type": "Tipo de VM",
    "Region": "Região",
    "Zone": "Zona",
    "Cores": "Núcleos",
    "Status": "Status",
    "RDQuota": "RDQuota",

    # Request types
    "Zonal Enablement": "Habilitação Zonal",
    "Region Enablement": "Habilitação Regional",
    "Region Enablement & Quota Increase": "Habilitação Regional & Aumento de Cota",
    "Quota Increase": "Aumento de Cota",
    "Region Limit Increase": "Aumento de Limite Regional",
    "Reserved Instances": "Instâncias Reservadas",

    # Statuses
    "Approved": "Aprovado",
    "Fulfilled": "Atendido",
    "Backlogged": "Pendente (Backlogged)",
    "Pending Customer Response": "Aguardando Resposta do Cliente",
    "Pending": "Pendente",

    "N/A": "N/A",
}


def translate_label(value: str) -> str:
    return DICTIONARY.get(value, value)


def translate_headers(headers: list[str] | tuple[str, ...]) -> list[str]:
    return [translate_label(h) for h in headers]

