"""Admission webhook subpackage.

This package contains the annotation parsing, the pod mutation engine and
the Flask server answering AdmissionReview requests.
"""

from vault_injector.webhook.config import parse_injection_config, validate_injection_config
from vault_injector.webhook.mutator import mutate_containers, mutate_pod, mutate_pod_spec
from vault_injector.webhook.server import create_app, review_pod

__all__ = [
    # config
    "parse_injection_config",
    "validate_injection_config",
    # mutator
    "mutate_containers",
    "mutate_pod_spec",
    "mutate_pod",
    # server
    "create_app",
    "review_pod",
]
