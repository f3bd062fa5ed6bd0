"""
Completion Settings Doctor - Validates AI completion settings offline.

Usage:
    python -m cocagent.completion.doctor --settings ~/.vim/coc-settings.json
"""

import argparse
import sys
from typing import Dict

from dotenv import load_dotenv

from .config import DEFAULT_NAMESPACE, DEFAULT_PROVIDER, Settings, ai_enabled, load_settings
from .errors import ClientError
from .factory import available_providers, client_from_settings
from .validation import config_warnings


def mask_key(api_key: str) -> str:
    """Show only the first 4 characters of a key."""
    if len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}...({len(api_key)} chars)"


def check_settings(settings: Settings) -> Dict:
    """Validate settings and try to build a client.

    Args:
        settings: Host settings view

    Returns:
        Dict with:
        - valid: bool
        - ai_enabled: bool
        - provider: str
        - client: dict of normalized config values (key masked) or None
        - errors: [str]
        - warnings: [str]
    """
    provider = settings.get("provider", DEFAULT_PROVIDER)
    result = {
        "valid": False,
        "ai_enabled": ai_enabled(settings),
        "provider": provider,
        "client": None,
        "errors": [],
        "warnings": [],
    }

    if provider not in available_providers():
        result["errors"].append(
            f"Provider '{provider}' not supported. "
            f"Available providers: {', '.join(available_providers())}"
        )
        return result

    if not result["ai_enabled"]:
        result["warnings"].append("AI completions disabled (ai.enabled is false)")
        result["valid"] = True
        return result

    try:
        client = client_from_settings(settings)
    except ClientError as e:
        result["errors"].append(e.message)
        return result

    if client is None:
        result["warnings"].append(
            f"No API key configured for '{provider}' (set {provider}.apiKey or {provider}.apiKeyEnv)"
        )
        result["valid"] = True
        return result

    config = client.config
    result["client"] = {
        "provider": config.provider,
        "api_key": mask_key(config.api_key),
        "base_url": config.base_url,
        "model": config.model,
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
        "timeout_s": config.timeout_s,
    }
    result["warnings"].extend(config_warnings(config.api_key, config.max_tokens))
    result["valid"] = True
    return result


def check_settings_file(settings_path: str, namespace: str = DEFAULT_NAMESPACE) -> Dict:
    """Load a settings file and validate it.

    Load failures are reported as errors rather than raised.
    """
    try:
        settings = load_settings(settings_path, namespace)
    except FileNotFoundError:
        return {
            "valid": False,
            "ai_enabled": False,
            "provider": None,
            "client": None,
            "errors": [f"Settings file not found: {settings_path}"],
            "warnings": [],
        }
    except Exception as e:
        return {
            "valid": False,
            "ai_enabled": False,
            "provider": None,
            "client": None,
            "errors": [f"Failed to parse settings: {e}"],
            "warnings": [],
        }

    return check_settings(settings)


def format_status(ok: bool) -> str:
    """Format status with a check mark."""
    return "✓" if ok else "✗"


def print_report(settings_path: str, check_result: Dict) -> None:
    """Print settings validation report.

    Args:
        settings_path: Path to settings file
        check_result: Result from check_settings()
    """
    print("Completion Settings Doctor")
    print("=" * 40)
    print()
    print(f"Settings: {settings_path}")
    print(f"AI enabled: {format_status(check_result['ai_enabled'])}")
    print(f"Provider: {check_result['provider']}")
    print()

    client = check_result.get("client")
    if client:
        print("Client:")
        for key, value in client.items():
            print(f"  {key}: {value}")
        print()

    if check_result["errors"]:
        print("Errors:")
        for error in check_result["errors"]:
            print(f"  - {error}")
        print()

    if check_result["warnings"]:
        print("Warnings:")
        for warning in check_result["warnings"]:
            print(f"  - {warning}")
        print()

    if check_result["valid"]:
        print("Status: ✓ VALID")
    else:
        print(f"Status: ✗ INVALID ({len(check_result['errors'])} error(s))")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Validate AI completion settings"
    )
    parser.add_argument(
        "--settings",
        default="coc-settings.json",
        help="Path to settings file (default: coc-settings.json)"
    )
    parser.add_argument(
        "--namespace",
        default=DEFAULT_NAMESPACE,
        help=f"Settings namespace (default: {DEFAULT_NAMESPACE})"
    )

    args = parser.parse_args()

    load_dotenv()

    result = check_settings_file(args.settings, args.namespace)
    print_report(args.settings, result)

    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
