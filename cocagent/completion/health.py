"""
Completion Provider Health Check - Test actual connectivity and responsiveness.

Usage:
    python -m cocagent.completion.health --settings coc-settings.json
    python -m cocagent.completion.health --settings coc-settings.json --json
"""

import argparse
import json
import sys
import time
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone

from dotenv import load_dotenv

from cocagent.logger import get_logger

from .client import CompletionClient
from .config import DEFAULT_NAMESPACE, load_settings
from .factory import client_from_settings
from .response import CompletionRequest

logger = get_logger("health")

PROBE_REQUEST = CompletionRequest(
    prompt="def add(a, b):",
    language="python",
    max_suggestions=1,
)


@dataclass
class ProviderHealth:
    """Health status for the configured provider."""

    provider_id: str | None
    healthy: bool
    latency_ms: int | None = None
    error: str | None = None
    model_tested: str | None = None
    suggestions: int = 0
    timestamp: str | None = None


def check_client_health(client: CompletionClient, timeout_s: float = 10) -> ProviderHealth:
    """Check provider health by making a minimal completion request.

    Args:
        client: Completion client to probe
        timeout_s: Request timeout in seconds

    Returns:
        ProviderHealth with status information
    """
    health = ProviderHealth(
        provider_id=client.provider,
        healthy=False,
        model_tested=client.config.model,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

    probe = CompletionClient(client.adapter, replace(client.config, timeout_s=timeout_s))

    start_time = time.time()
    try:
        response = probe.get_completions(PROBE_REQUEST)
        health.latency_ms = int((time.time() - start_time) * 1000)
        health.suggestions = len(response.suggestions)
        if response.model:
            health.model_tested = response.model

        if response.suggestions:
            health.healthy = True
        else:
            health.error = "Empty response from provider"

    except Exception as e:
        elapsed_ms = int((time.time() - start_time) * 1000)
        health.error = str(e)
        health.latency_ms = elapsed_ms if elapsed_ms > 0 else None

    logger.info(
        "health.checked",
        provider=health.provider_id,
        healthy=health.healthy,
        latency_ms=health.latency_ms,
    )
    return health


def check_settings_health(
    settings_path: str,
    namespace: str = DEFAULT_NAMESPACE,
    timeout_s: float = 10,
) -> ProviderHealth:
    """Load settings, build the client and probe it."""
    try:
        settings = load_settings(settings_path, namespace)
        client = client_from_settings(settings)
    except Exception as e:
        return ProviderHealth(provider_id=None, healthy=False, error=str(e))

    if client is None:
        return ProviderHealth(
            provider_id=settings.get("provider"),
            healthy=False,
            error="AI completions disabled or no API key configured",
        )

    return check_client_health(client, timeout_s)


def print_health_report(settings_path: str, health: ProviderHealth) -> None:
    """Print health check report."""
    print("Completion Provider Health Check")
    print("=" * 60)
    print()
    print(f"Settings: {settings_path}")
    print()

    status = "✓" if health.healthy else "✗"
    print(f"  {status} {health.provider_id}", end="")

    if health.healthy:
        latency = f"{health.latency_ms}ms" if health.latency_ms else "N/A"
        print(
            f" - Healthy (latency: {latency}, model: {health.model_tested}, "
            f"suggestions: {health.suggestions})"
        )
    else:
        error = health.error or "Unknown error"
        latency_info = f" (latency: {health.latency_ms}ms)" if health.latency_ms else ""
        print(f" - Unhealthy: {error}{latency_info}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check connectivity of the configured completion provider",
    )
    parser.add_argument(
        "--settings",
        default="coc-settings.json",
        help="Path to settings file (default: coc-settings.json)",
    )
    parser.add_argument(
        "--namespace",
        default=DEFAULT_NAMESPACE,
        help=f"Settings namespace (default: {DEFAULT_NAMESPACE})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10,
        help="Request timeout in seconds (default: 10)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )

    args = parser.parse_args()

    load_dotenv()

    health = check_settings_health(args.settings, args.namespace, args.timeout)

    if args.json:
        print(json.dumps(asdict(health), indent=2))
    else:
        print_health_report(args.settings, health)

    sys.exit(0 if health.healthy else 1)


if __name__ == "__main__":
    main()
