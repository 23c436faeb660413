from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand, CommandError

from operator_core.permissions import OPERATOR_ADMIN, OPERATOR_ROLES


class Command(BaseCommand):
    help = (
        "Create the admin console role groups and optionally promote a user to "
        "platform admin (role 'admin', staff, operator_admin)."
    )

    def add_arguments(self, parser):
        parser.add_argument("--assign-email", dest="assign_email")
        parser.add_argument("--assign-username", dest="assign_username")

    def handle(self, *args, **options):
        created = []
        for group_name in OPERATOR_ROLES:
            _, was_created = Group.objects.get_or_create(name=group_name)
            if was_created:
                created.append(group_name)

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created groups: {', '.join(created)}"))
        else:
            self.stdout.write("Operator groups already exist.")

        assign_email = options.get("assign_email")
        assign_username = options.get("assign_username")
        if assign_email and assign_username:
            raise CommandError("Provide only one of --assign-email or --assign-username.")
        if not (assign_email or assign_username):
            return

        user = self._get_user(assign_email, assign_username)
        user.is_staff = True
        user.role = "admin"
        user.status = "active"
        user.save(update_fields=["is_staff", "role", "status"])
        user.groups.add(Group.objects.get(name=OPERATOR_ADMIN))
        self.stdout.write(self.style.SUCCESS(f"Promoted {user} to platform admin."))

    def _get_user(self, email, username):
        User = get_user_model()
        try:
            if email:
                return User.objects.get(email__iexact=email)
            return User.objects.get(username=username)
        except User.DoesNotExist:
            raise CommandError("User not found for the provided identifier.")
