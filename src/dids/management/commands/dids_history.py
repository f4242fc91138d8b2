import json

from django.core.management.base import BaseCommand, CommandError

from src.dids import selectors


class Command(BaseCommand):
    help = "Print the version chain of a DID"

    def add_arguments(self, parser):
        parser.add_argument("identity")
        parser.add_argument("--documents", action="store_true", help="Also dump each payload")

    def handle(self, *args, **opts):
        history = selectors.get_history(opts["identity"])
        if not history:
            raise CommandError("DID history not found")

        for v in history:
            marker = "*" if v.is_active else " "
            self.stdout.write(f"{marker} v{v.sequence}  {v.created_at.isoformat()}  owner={v.owner}  id={v.id}")
            if opts["documents"]:
                self.stdout.write(json.dumps(v.payload, indent=2, ensure_ascii=False))
