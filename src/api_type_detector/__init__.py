"""Infer TypeScript declarations from observed JSON API responses."""

from .config import InferenceOptions, settings
from .exceptions import MalformedSampleError, ResourceExceededError, StoreError, TypeDetectorError
from .inference import GeneratedDeclaration, Observation, Route, regenerate_all, synthesize_route
from .store import DeclarationStore

__all__ = [
    "settings",
    "InferenceOptions",
    "Observation",
    "Route",
    "GeneratedDeclaration",
    "synthesize_route",
    "regenerate_all",
    "DeclarationStore",
    "TypeDetectorError",
    "MalformedSampleError",
    "ResourceExceededError",
    "StoreError",
]
