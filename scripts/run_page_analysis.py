#!/usr/bin/env python3
"""
Page Analysis Runner

Runs the plain-language analysis for one web page:
1. Page extraction (text + metadata)
2. Analyzer, Rewriter (Groq), Grammar, Style, SEO, Validator
3. Scores, improved text and improvements

Usage:
    # Set the API key first (or pass --credential):
    export GROQ_API_KEY=your_key

    # Run analysis:
    python scripts/run_page_analysis.py https://www.aragon.es/tramites

    # With options:
    python scripts/run_page_analysis.py https://www.aragon.es/tramites \
        --char-limit 5000 \
        --credential gsk_... --save-credential \
        --json
"""

import asyncio
import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def print_progress(stage: str, message: str) -> None:
    print(f"  [{stage}] {message}")


def print_report(result) -> None:
    report = result.report

    print("\n" + "="*70)
    print("RESULTADO")
    print("="*70)
    print(f"Título:        {result.metadata.title or '(sin título)'}")
    print(f"Palabras:      {result.stats.words}")
    print(f"Oraciones:     {result.stats.sentences}")
    print(f"Caracteres:    {result.stats.characters}" + (" (truncado)" if result.truncated else ""))
    print(f"Severidad:     {report.severity}")
    print(f"Calidad:       {report.quality_score:.0%}")
    print(f"Legibilidad:   {report.readability_score:.0%}")
    balance = report.seo.clarity_balance
    print(f"SEO / Claridad / Balance: {balance.seo_score:.2f} / {balance.clarity_score:.2f} / {balance.balance_score:.2f}")

    print("\n" + "="*70)
    print("TEXTO MEJORADO")
    print("="*70)
    print(report.final_text)

    print("\n" + "="*70)
    print(f"MEJORAS ({len(report.improvements)})")
    print("="*70)
    for finding in report.improvements:
        print(f"- [{finding.type.value}] {finding.message}")

    print("\n" + "="*70)
    print("CUMPLIMIENTO")
    print("="*70)
    for check in report.validation.compliance:
        print(f"{'✓' if check.passed else '✗'} {check.criterion}")


async def run_page_analysis(
    url: str,
    credential: str = None,
    char_limit: int = None,
    save_credential: bool = False,
    as_json: bool = False,
) -> int:
    """Run the analysis and print the result. Returns the exit code."""

    load_dotenv()

    # Import here so .env values are visible to the settings
    from aclarador.context import ExtractionError
    from aclarador.integrations import MissingCredentialError, RewriteServiceError
    from aclarador.services import PageAnalysisService

    service = PageAnalysisService()

    if save_credential:
        if not credential:
            print("ERROR: --save-credential requires --credential")
            return 2
        service.store.save_credential(credential)
        print(f"✓ Clave API guardada en {service.store.path}")

    if char_limit is not None and not service.store.save_char_limit(char_limit):
        print("ERROR: --char-limit must be at least 500")
        return 2

    if not as_json:
        print(f"\n{'='*70}")
        print("ACLARADOR - ANÁLISIS DE LENGUAJE CLARO")
        print(f"{'='*70}")
        print(f"URL:          {url}")
        print(f"Char limit:   {service.resolve_char_limit(char_limit)}")
        print(f"{'='*70}\n")

    try:
        result = await service.analyze_page(
            url,
            credential=credential,
            char_limit=char_limit,
            on_progress=None if as_json else print_progress,
        )
    except MissingCredentialError as e:
        print(f"ERROR: {e}")
        print("\nSet it with:")
        print("  export GROQ_API_KEY=your_key")
        return 1
    except ExtractionError as e:
        print(f"ERROR: {e}")
        return 1
    except RewriteServiceError as e:
        logger.error(f"Rewrite failed: {e} (status={e.status_code})")
        print(f"ERROR: {e}")
        return 1

    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_report(result)
        print(f"\nDuración: {result.report.duration_seconds:.1f}s")

    return 0


def main():
    parser = argparse.ArgumentParser(description="Run plain-language analysis on a web page")
    parser.add_argument("url", help="Page URL (http or https)")
    parser.add_argument("--credential", help="Groq API key (defaults to stored key or GROQ_API_KEY)")
    parser.add_argument("--char-limit", type=int, help="Maximum characters to analyze (>= 500, stored)")
    parser.add_argument("--save-credential", action="store_true", help="Store --credential for later runs")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    args = parser.parse_args()

    exit_code = asyncio.run(run_page_analysis(
        url=args.url,
        credential=args.credential,
        char_limit=args.char_limit,
        save_credential=args.save_credential,
        as_json=args.json,
    ))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
