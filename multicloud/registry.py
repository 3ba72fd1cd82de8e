import logging
import threading

from multicloud.exceptions import NonCloneableTemplate, PrototypeNotFound
from multicloud.providers.ids import default_id_generator


class PrototypeRegistry:
    """
    Catálogo de templates de VM clonáveis (padrão Prototype).

    O mapa é partilhado por todos os pedidos durante a vida do processo;
    todo o acesso passa por um único lock.
    """

    def __init__(self, id_generator=None):
        self._prototypes = {}
        self._lock = threading.Lock()
        self.id_generator = id_generator or default_id_generator
        self.logger = logging.getLogger(__name__)

    def register(self, name, template):
        """Registra (ou substitui) o template sob o nome dado."""
        if template is None or not callable(getattr(template, 'clone', None)):
            raise NonCloneableTemplate(name)

        with self._lock:
            replaced = name in self._prototypes
            self._prototypes[name] = template

        if replaced:
            self.logger.info(f"Protótipo '{name}' substituído.")
        else:
            self.logger.info(f"Protótipo '{name}' registrado.")

    def clone(self, name):
        with self._lock:
            template = self._prototypes.get(name)
            if template is None:
                raise PrototypeNotFound(name)
            return template.clone(self.id_generator)

    def has(self, name):
        with self._lock:
            return name in self._prototypes

    def list_names(self):
        with self._lock:
            return list(self._prototypes.keys())

    def unregister(self, name):
        """Remove o protótipo; devolve False se não existia."""
        with self._lock:
            return self._prototypes.pop(name, None) is not None
