from django.core.management.base import BaseCommand, CommandError

from src.dids.integrity import scan_store
from src.dids.models import DIDDocumentVersion


class Command(BaseCommand):
    help = "Check every DID version chain: one active version at most, sequences 1..n, a single owner"

    def add_arguments(self, parser):
        parser.add_argument("--identity", help="Only check this DID")

    def handle(self, *args, **opts):
        identity = opts.get("identity")
        if identity and not DIDDocumentVersion.objects.filter(identity=identity).exists():
            raise CommandError(f"Unknown DID: {identity}")

        report = scan_store(identity)
        for did, problems in report.items():
            for problem in problems:
                self.stderr.write(f"{did}: {problem}")
        if report:
            raise CommandError(f"{len(report)} DID chain(s) violate store invariants")

        checked = identity or "all DIDs"
        self.stdout.write(self.style.SUCCESS(f"Valid ✓  {checked}"))
