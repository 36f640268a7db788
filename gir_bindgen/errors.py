from __future__ import annotations


class BindgenError(Exception):
    pass


class GirParseError(BindgenError):
    pass


class RepositoryNotResolvedError(BindgenError):
    def __init__(self, operation: str):
        super().__init__(f"Repository.resolve() must be called first (attempted {operation})")
        self.operation = operation


class ConfigurationError(BindgenError):
    pass


class UnknownNamespaceError(BindgenError):
    def __init__(self, namespace: str):
        super().__init__(f"Namespace {namespace} not found in repository")
        self.namespace = namespace
