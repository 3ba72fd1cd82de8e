"""
Auditoria dos pedidos de aprovisionamento.

Os parâmetros são sanitizados antes de irem para o log ou para a tabela
provisioning_logs. Falhas ao gravar a auditoria nunca alteram o resultado.
"""
import logging

from multicloud.exceptions import PersistenceFailure

DEFAULT_SENSITIVE_KEYS = ('api_key', 'secret_key', 'password', 'token', 'credentials')
REDACTED = '***REDACTED***'

logger = logging.getLogger(__name__)


def sanitize_params(params, sensitive_keys=DEFAULT_SENSITIVE_KEYS):
    """Cópia dos parâmetros com chaves sensíveis mascaradas (também em sub-secções e listas)."""
    if isinstance(params, (list, tuple)):
        return [sanitize_params(item, sensitive_keys) for item in params]
    if not isinstance(params, dict):
        return params

    sanitized = {}
    for key, value in params.items():
        if key in sensitive_keys and value:
            sanitized[key] = REDACTED
        else:
            sanitized[key] = sanitize_params(value, sensitive_keys)
    return sanitized


class ProvisioningAuditor:

    def __init__(self, store=None, sensitive_keys=DEFAULT_SENSITIVE_KEYS):
        self.store = store
        self.sensitive_keys = tuple(sensitive_keys)

    def log_request(self, provider, params):
        logger.info(
            f"Pedido de aprovisionamento: provider={provider} "
            f"params={sanitize_params(params, self.sensitive_keys)}"
        )

    def log_result(self, result, params):
        if result.is_success:
            logger.info(f"Aprovisionamento concluído: provider={result.provider} vm_id={result.vm_id}")
        else:
            logger.warning(f"Aprovisionamento falhou: provider={result.provider} erro={result.error_message}")

        if self.store is None:
            return

        try:
            self.store.insert('provisioning_logs', {
                'vm_id': result.vm_id,
                'provider': result.provider,
                'request_params': sanitize_params(params, self.sensitive_keys),
                'status': result.status,
                'error_message': result.error_message,
                'timestamp': result.timestamp,
            })
        except PersistenceFailure as e:
            logger.error(f"Erro ao guardar log de aprovisionamento: {e}")
        except Exception:
            logger.exception("Erro inesperado ao guardar log de aprovisionamento")
