"""Dashboard counters for the provider and recipient home screens."""

from careflow.models import ActorRole, OnboardingStatus, ReportStatus
from careflow.schemas.auth import AuthSession
from careflow.schemas.report import ProviderDashboard, RecipientDashboard
from careflow.services.access_policy import Action, authorize
from careflow.services.identity_store import IdentityStore
from careflow.services.report_service import ReportService


class DashboardService:
    def __init__(self, identity: IdentityStore, reports: ReportService):
        self.identity = identity
        self.reports = reports

    def summary(self, actor: AuthSession):
        if actor.role == ActorRole.PROVIDER:
            return self.provider_summary(actor)
        return self.recipient_summary(actor)

    def provider_summary(self, actor: AuthSession) -> ProviderDashboard:
        authorize(actor, Action.VIEW_RECIPIENTS)
        counts = self.reports.count_by_status()
        return ProviderDashboard(
            pending_recipients=self.identity.count_recipients(OnboardingStatus.PENDING),
            approved_recipients=self.identity.count_recipients(
                OnboardingStatus.APPROVED
            ),
            rejected_recipients=self.identity.count_recipients(
                OnboardingStatus.REJECTED
            ),
            total_recipients=self.identity.count_recipients(),
            pending_reports=counts[ReportStatus.SUBMITTED.value],
        )

    def recipient_summary(self, actor: AuthSession) -> RecipientDashboard:
        counts = self.reports.count_by_status(recipient_id=actor.actor_id)
        return RecipientDashboard(
            onboarding_status=(
                actor.onboarding_status.value if actor.onboarding_status else None
            ),
            total_reports=sum(counts.values()),
            by_status=counts,
        )
