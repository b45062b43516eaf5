"""Alert Message Builder

Maps a resolved lifecycle outcome and quota headroom to the single banner
message shown on the dashboard. Lifecycle messages take precedence over
quota messages; causes are never combined.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.app.services.quota_evaluator import allows_creation
from src.domain.subscription_state import AlertSeverity, LifecycleOutcome, LifecycleStatus

TRIAL_WARNING_DAYS = 3

MSG_TRIAL_ENDING = "無料トライアル期間は残り{days}日です。継続してご利用いただくには有料プランへの登録をお願いします。"
MSG_TRIAL = "無料トライアル期間は残り{days}日です。"
MSG_GRACE_PERIOD = "ご利用期間が終了しました。猶予期間は残り{days}日です。QRコードの作成と診断の計測は停止しています。"
MSG_EXPIRED = "契約期間が終了しました。サービスを再開するには有料プランへの登録が必要です。"
MSG_CONTACT_SUPPORT = "サービスが利用できません。契約状況についてサポートまでお問い合わせください。"
MSG_PAST_DUE = "お支払いに問題があります。カード情報を更新してください。"
MSG_CANCELED = "解約手続き済みです。{date}までご利用いただけます。再開する場合はプランを再登録してください。"
MSG_CANCELED_NO_DATE = "解約手続き済みです。再開する場合はプランを再登録してください。"
MSG_QUOTA_EXHAUSTED = "QRコードの作成上限（{limit}枚）に達しました。追加で作成するにはプランをアップグレードしてください。"


@dataclass(frozen=True)
class AlertMessage:
    message: Optional[str]
    severity: AlertSeverity


NO_ALERT = AlertMessage(message=None, severity=AlertSeverity.NONE)


def format_date_ja(value: datetime) -> str:
    """Format a date as 2024年1月15日"""
    return f"{value.year}年{value.month}月{value.day}日"


class AlertMessageBuilder:
    """
    Deterministic banner builder

    Usage:
        builder = AlertMessageBuilder()
        alert = builder.build(outcome, remaining_qr_codes=0, qr_code_limit=2)
    """

    def __init__(self, trial_warning_days: int = TRIAL_WARNING_DAYS):
        self.trial_warning_days = trial_warning_days
        self._lifecycle_handlers = {
            LifecycleStatus.TRIAL: self._trial,
            LifecycleStatus.GRACE_PERIOD: self._grace_period,
            LifecycleStatus.EXPIRED: self._expired,
            LifecycleStatus.PAST_DUE: self._past_due,
            LifecycleStatus.CANCELED: self._canceled,
        }

    def build(
        self,
        outcome: LifecycleOutcome,
        remaining_qr_codes: Optional[int] = None,
        qr_code_limit: Optional[int] = None,
    ) -> AlertMessage:
        """
        Build the banner for a clinic

        Args:
            outcome: Resolved lifecycle outcome
            remaining_qr_codes: Quota headroom (None = unlimited or not counted)
            qr_code_limit: Quota of the effective plan

        Returns:
            Exactly one AlertMessage
        """
        handler = self._lifecycle_handlers.get(outcome.status)
        if handler is not None:
            return handler(outcome)

        if remaining_qr_codes == 0 and allows_creation(outcome):
            return AlertMessage(
                message=MSG_QUOTA_EXHAUSTED.format(limit=qr_code_limit),
                severity=AlertSeverity.WARNING,
            )

        return NO_ALERT

    def _trial(self, outcome: LifecycleOutcome) -> AlertMessage:
        days = outcome.trial_days_left or 0
        if days <= self.trial_warning_days:
            return AlertMessage(MSG_TRIAL_ENDING.format(days=days), AlertSeverity.WARNING)
        return AlertMessage(MSG_TRIAL.format(days=days), AlertSeverity.INFO)

    def _grace_period(self, outcome: LifecycleOutcome) -> AlertMessage:
        days = outcome.grace_period_days_left or 0
        return AlertMessage(MSG_GRACE_PERIOD.format(days=days), AlertSeverity.ERROR)

    def _expired(self, outcome: LifecycleOutcome) -> AlertMessage:
        if outcome.rule == "unrecognized_status":
            return AlertMessage(MSG_CONTACT_SUPPORT, AlertSeverity.ERROR)
        return AlertMessage(MSG_EXPIRED, AlertSeverity.ERROR)

    def _past_due(self, outcome: LifecycleOutcome) -> AlertMessage:
        return AlertMessage(MSG_PAST_DUE, AlertSeverity.ERROR)

    def _canceled(self, outcome: LifecycleOutcome) -> AlertMessage:
        if outcome.effective_period_end is None:
            return AlertMessage(MSG_CANCELED_NO_DATE, AlertSeverity.WARNING)
        return AlertMessage(
            MSG_CANCELED.format(date=format_date_ja(outcome.effective_period_end)),
            AlertSeverity.WARNING,
        )
