import json
import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from core.errors import AppError, ConflictError
from core.transactions import RetryPolicy, run_with_retry
from pricing.dataclasses import ImportSummary, PricingInput
from pricing.services.pricing_service import create_pricing_with_rate

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Import pricing agreements (and their shipping rates) from a JSON list, one transaction per entry."

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="JSON file with a list of agreement entries")
        parser.add_argument("--max-retries", type=int, default=None, help="Override TX_RETRY_MAX_RETRIES")

    def handle(self, *args, **opts):
        path = Path(opts["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        try:
            entries = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {path}: {e}")
        if not isinstance(entries, list):
            raise CommandError("Expected a JSON list of agreement entries")

        policy = RetryPolicy.from_settings()
        if opts.get("max_retries") is not None:
            policy = RetryPolicy(opts["max_retries"], policy.base_delay_ms, policy.max_delay_ms)

        summary = ImportSummary()
        for index, entry in enumerate(entries):
            inp = PricingInput.from_dict(entry)
            try:
                run_with_retry(lambda: create_pricing_with_rate(inp), policy=policy)
            except ConflictError:
                summary.conflicts += 1
                self.stdout.write(self.style.WARNING(f"Entry {index}: agreement already exists, skipped"))
                continue
            except AppError as e:
                summary.errors[index] = e.message
                logger.info("Import aborted at entry %s: %s", index, e.message)
                raise CommandError(f"Entry {index}: {e.message}")
            summary.created += 1

        logger.info("Imported pricing agreements: created=%s conflicts=%s", summary.created, summary.conflicts)
        self.stdout.write(
            self.style.SUCCESS(f"Imported {summary.created} agreements ({summary.conflicts} already existed)")
        )
