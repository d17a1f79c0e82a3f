"""App — orquestração, casos de uso e infraestrutura do gateway.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos do espelho local (BillRecord)
- use_cases/: casos de uso (processamento de webhooks)
- services/: serviços de aplicação (espelho de bills)
- infra/: implementações concretas de IO (stores)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs estruturados

Padrão: app executa; api adapta; config configura.
"""
