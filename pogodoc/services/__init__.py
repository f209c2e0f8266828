"""Service layer: workflows and external integrations."""

from .gateway import ServiceGateway
from .http_gateway import HttpServiceGateway
from .file_loader import FileLoader
from .object_uploader import ObjectUploader
from .template_orchestrator import TemplateOrchestrator
from .render_orchestrator import RenderOrchestrator

__all__ = [
    "ServiceGateway",
    "HttpServiceGateway",
    "FileLoader",
    "ObjectUploader",
    "TemplateOrchestrator",
    "RenderOrchestrator",
]
