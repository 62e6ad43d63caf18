"""Assemble the built-in handler packages in route-table order.

Order matters: the router returns the first match, so within each
resource the literal routes come before the parameterized routes they
overlap with (``/members/me`` before ``/members/:userId``).
"""

from tenantkit.handlers import memberships, organizations, users
from tenantkit.handlers.use_cases import UseCases
from tenantkit.routing.route import HandlerPackage


def build_handlers(use_cases: UseCases) -> tuple[HandlerPackage, ...]:
    """Every built-in endpoint, ready to pass to ``Dispatcher``."""
    return (
        users.create_user_package(use_cases),
        users.get_user_package(use_cases),
        users.update_user_package(use_cases),
        users.list_user_organizations_package(use_cases),
        users.delete_user_package(use_cases),
        organizations.create_organization_package(use_cases),
        organizations.list_organization_members_package(use_cases),
        organizations.archive_organization_package(use_cases),
        organizations.restore_organization_package(use_cases),
        organizations.transfer_organization_ownership_package(use_cases),
        organizations.get_organization_package(use_cases),
        organizations.update_organization_package(use_cases),
        organizations.delete_organization_package(use_cases),
        memberships.add_organization_member_package(use_cases),
        memberships.accept_organization_invitation_package(use_cases),
        memberships.update_organization_member_role_package(use_cases),
        memberships.leave_organization_package(use_cases),
        memberships.remove_organization_member_package(use_cases),
    )
