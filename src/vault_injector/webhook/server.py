"""Mutating admission webhook server.

Receives ``admission.k8s.io/v1`` AdmissionReview requests for pods, runs the
mutation engine and answers with a base64 encoded RFC 6902 JSON Patch.
Pods that are rejected by the engine are denied with its message.
"""

import base64
import json
from typing import Any

import jsonpatch
from flask import Flask, jsonify, request
from icecream import ic

from vault_injector import console
from vault_injector.constants import DEFAULT_VAULT_ENV_IMAGE
from vault_injector.exceptions import MissingAnnotationError
from vault_injector.webhook.mutator import mutate_pod

ADMISSION_API_VERSION = "admission.k8s.io/v1"


def _review_response(uid: str, **fields: Any) -> dict[str, Any]:
    return {
        "apiVersion": ADMISSION_API_VERSION,
        "kind": "AdmissionReview",
        "response": {"uid": uid, **fields},
    }


def review_pod(admission_request: dict[str, Any], *, vault_env_image: str = DEFAULT_VAULT_ENV_IMAGE) -> dict[str, Any]:
    """Compute the AdmissionReview answer for one admission request.

    Args:
        admission_request: The ``request`` field of the incoming review.
        vault_env_image: Image for the staging init container.

    Returns:
        The complete AdmissionReview response document.

    """
    uid = admission_request.get("uid", "")
    pod = admission_request.get("object") or {}
    kind = (admission_request.get("kind") or {}).get("kind") or pod.get("kind")

    if kind != "Pod":
        return _review_response(uid, allowed=True)

    metadata = pod.get("metadata") or {}
    name = metadata.get("name") or metadata.get("generateName") or "<unnamed>"
    namespace = metadata.get("namespace") or admission_request.get("namespace", "")
    ic(uid, namespace, name)

    try:
        result = mutate_pod(pod, vault_env_image=vault_env_image)
    except MissingAnnotationError as err:
        console.warning(f"Rejecting pod {namespace}/{name}: {err}")
        return _review_response(uid, allowed=False, status={"code": 400, "message": str(err)})

    if not result.mutated:
        return _review_response(uid, allowed=True)

    patch = jsonpatch.make_patch(pod, result.pod)
    console.success(f"Mutated pod {console.highlight(f'{namespace}/{name}')}")
    return _review_response(
        uid,
        allowed=True,
        patchType="JSONPatch",
        patch=base64.b64encode(json.dumps(patch.patch).encode()).decode(),
    )


def create_app(vault_env_image: str = DEFAULT_VAULT_ENV_IMAGE) -> Flask:
    """Create the webhook application.

    Args:
        vault_env_image: Image for the staging init container.

    Returns:
        The Flask application serving ``/pods`` and ``/healthz``.

    """
    app = Flask(__name__)

    @app.post("/pods")
    def mutate_pods():
        review = request.get_json(silent=True)
        if not isinstance(review, dict) or not isinstance(review.get("request"), dict):
            return jsonify({"error": "expected an AdmissionReview with a request"}), 400
        return jsonify(review_pod(review["request"], vault_env_image=vault_env_image))

    @app.get("/healthz")
    def healthz():
        return "ok"

    return app
