"""Connectors — adapters de borda para APIs externas.

Estrutura:
- paykaduna/: PayKaduna IBS (bills, taxpayers, pagamentos, webhooks)
"""

__all__: list[str] = []
