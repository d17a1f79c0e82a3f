"""API — camada de borda do gateway PayKaduna.

Responsabilidades:
- Receber requests de clientes internos e webhooks do provedor
- Validar assinaturas e payloads
- Assinar e executar chamadas à API PayKaduna
- Mapear falhas para o envelope de erro

Subpastas:
- connectors/: adapter HTTP do provedor (assinatura, retry, webhook)
- middleware/: log estruturado de requests
- routes/: endpoints HTTP (bills, taxpayers, pagamentos, webhook, health)

NÃO PODE conter: regras de espelhamento, persistência, orquestração de use cases.
"""
