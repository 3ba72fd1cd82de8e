class ProvisioningError(Exception):
    """Erro base do núcleo de aprovisionamento."""
    pass


class UnsupportedProvider(ProvisioningError):
    def __init__(self, provider):
        self.provider = provider
        super().__init__(f"Provedor '{provider}' não suportado.")


class UnsupportedCategory(ProvisioningError):
    def __init__(self, category):
        self.category = category
        super().__init__(
            f"Categoria de VM '{category}' não suportada. "
            "Use: standard, memory-optimized, compute-optimized."
        )


class MissingRequiredResource(ProvisioningError):
    """Pedido direto sem uma das secções vm/network/disk."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            f"Parâmetros obrigatórios ausentes para: {', '.join(self.missing)}."
        )


class InvalidBundle(ProvisioningError):
    pass


class PrototypeNotFound(ProvisioningError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Protótipo '{name}' não encontrado no registro.")


class NonCloneableTemplate(ProvisioningError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"O template '{name}' não implementa clone().")


class PersistenceFailure(ProvisioningError):
    """Falha de escrita/leitura no armazenamento, com a tabela envolvida."""

    def __init__(self, table, message):
        self.table = table
        super().__init__(f"Falha de persistência na tabela '{table}': {message}")


class ResourceNotFound(ProvisioningError):
    def __init__(self, vm_id):
        self.vm_id = vm_id
        super().__init__(f"VM com ID '{vm_id}' não encontrada.")
