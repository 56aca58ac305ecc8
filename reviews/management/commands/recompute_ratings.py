from django.core.management.base import BaseCommand, CommandError

from core.exceptions import CanteenServiceError
from core.subjects import CanteenSubject, MenuItemSubject, parse_id
from reviews.services import recompute_aggregate, recompute_all_aggregates


class Command(BaseCommand):
    help = "Rebuild canteen and menu item ratings from their reviews."

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group()
        group.add_argument("--canteen", help="Only recompute this canteen id.")
        group.add_argument("--menu-item", dest="menu_item", help="Only recompute this menu item id.")

    def handle(self, *args, **options):
        try:
            if options["canteen"]:
                subject = CanteenSubject(parse_id(options["canteen"], "canteen"))
            elif options["menu_item"]:
                subject = MenuItemSubject(parse_id(options["menu_item"], "menu_item"))
            else:
                refreshed = recompute_all_aggregates()
                self.stdout.write(self.style.SUCCESS(f"Recomputed ratings for {refreshed} subjects"))
                return

            recompute_aggregate(subject)
        except CanteenServiceError as exc:
            raise CommandError(exc.message)

        self.stdout.write(self.style.SUCCESS(f"Recomputed rating for {subject.kind} {subject.id}"))
