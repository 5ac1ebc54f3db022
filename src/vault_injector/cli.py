#!/usr/bin/env python
"""Command-line interfaces for vault-secrets-injector.

Two entry points live here: ``vault-env``, the container entrypoint that
resolves Vault secrets and execs the real command, and
``vault-secrets-webhook``, which serves the admission webhook or mutates a
manifest offline. Both turn package errors into a message on stderr and
exit status 1.
"""

import os
import sys

import click
import yaml
from icecream import ic

from vault_injector import __version__, console
from vault_injector.constants import DEFAULT_VAULT_ENV_IMAGE
from vault_injector.exceptions import ConfigurationError, VaultInjectorError
from vault_injector.parsing import parse_pod_manifest
from vault_injector.runtime.runner import run
from vault_injector.webhook.mutator import mutate_pod
from vault_injector.webhook.server import create_app


def _configure_debug(debug: bool) -> None:
    if debug:
        ic.enable()
    else:
        ic.disable()


@click.command(
    help="Resolve vault: references in the environment and exec COMMAND",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, envvar="VAULT_ENV_DEBUG", help="print debug information")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def vault_env(debug: bool, version: bool, command: tuple[str, ...]) -> None:
    """Run the target command with secrets from Vault in its environment.

    Args:
        debug: Enable debug output.
        version: Print version and exit.
        command: The target program followed by its arguments.

    """
    _configure_debug(debug)

    if version:
        click.echo(__version__)
        return

    try:
        run(command, dict(os.environ))
    except VaultInjectorError as e:
        console.error(str(e))
        sys.exit(1)


@click.group(help="Mutating admission webhook injecting Vault secrets into pods")
@click.version_option(__version__, "--version", "-v", message="%(version)s")
@click.option("--debug", required=False, is_flag=True, envvar="DEBUG", help="print debug information")
def webhook(debug: bool) -> None:
    """Configure shared options for the webhook commands."""
    _configure_debug(debug)


@webhook.command(help="Serve the admission webhook over TLS")
@click.option("--listen-address", envvar="LISTEN_ADDRESS", default="0.0.0.0", show_default=True)
@click.option("--port", envvar="PORT", default=8443, type=int, show_default=True)
@click.option("--tls-cert-file", envvar="TLS_CERT_FILE", required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--tls-private-key-file", envvar="TLS_PRIVATE_KEY_FILE", required=True, type=click.Path(exists=True, dir_okay=False)
)
@click.option("--vault-env-image", envvar="VAULT_ENV_IMAGE", default=DEFAULT_VAULT_ENV_IMAGE, show_default=True)
def serve(listen_address: str, port: int, tls_cert_file: str, tls_private_key_file: str, vault_env_image: str) -> None:
    """Start the HTTPS server answering AdmissionReview requests on /pods.

    Args:
        listen_address: Interface to bind.
        port: Port to bind.
        tls_cert_file: Server certificate.
        tls_private_key_file: Server private key.
        vault_env_image: Image for the staging init container.

    """
    app = create_app(vault_env_image=vault_env_image)
    console.action(f"Listening with TLS on {console.highlight(f'{listen_address}:{port}')}")
    app.run(host=listen_address, port=port, ssl_context=(tls_cert_file, tls_private_key_file))


@webhook.command(help="Mutate a Pod manifest and print the result")
@click.argument("manifest", type=click.Path(dir_okay=False))
@click.option("--vault-env-image", envvar="VAULT_ENV_IMAGE", default=DEFAULT_VAULT_ENV_IMAGE, show_default=True)
def mutate(manifest: str, vault_env_image: str) -> None:
    """Apply the mutation offline and write the resulting manifest to stdout.

    Args:
        manifest: Path to a YAML file holding one Pod.
        vault_env_image: Image for the staging init container.

    """
    try:
        pod = parse_pod_manifest(manifest)
        result = mutate_pod(pod, vault_env_image=vault_env_image)
    except ConfigurationError as e:
        console.error(str(e))
        sys.exit(1)

    if result.mutated:
        spec = result.pod["spec"]
        console.summary_panel(
            "Vault Injection",
            {
                "Pod": result.pod.get("metadata", {}).get("name", ""),
                "Init containers": str(len(spec.get("initContainers", []))),
                "Volumes": str(len(spec.get("volumes", []))),
            },
        )
    else:
        console.info("Nothing to inject, manifest left unchanged")

    click.echo(yaml.safe_dump(result.pod, sort_keys=False), nl=False)


if __name__ == "__main__":
    webhook()
