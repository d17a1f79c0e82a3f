"""Rotas HTTP do gateway PayKaduna (bills, taxpayers, pagamentos, webhook)."""
