"""Tests for payment line building."""

from trpayroll.sdk.payments import build_payments
from trpayroll.sdk.schemas import ExtraPayment


class TestBuildPayments:
    """Tests for build_payments."""

    def test_base_line_only(self):
        """Without extras there is exactly the base pay line."""
        payments = build_payments([])

        assert len(payments) == 1
        base = payments[0]
        assert base.payment_ref == "1"
        assert base.payment_type == "RegularPayment"
        assert base.payment_amount is None

    def test_base_line_amount_left_out_of_payload(self):
        payload = build_payments([])[0].model_dump(by_alias=True, exclude_none=True)

        assert "paymentAmount" not in payload
        assert "calculationType" not in payload
        assert payload["paymentRef"] == "1"

    def test_extra_refs_follow_input_order(self):
        extras = [
            ExtraPayment(name="Bonus", amount=5000, type="Gross"),
            ExtraPayment(name="Yol", amount=1000, type="Net", payment_type="SocialAid"),
            ExtraPayment(name="Mesai", amount=750, type="Gross", payment_type="Overtime"),
        ]

        payments = build_payments(extras)

        assert [p.payment_ref for p in payments] == ["1", "extra_2", "extra_3", "extra_4"]
        assert [p.payment_name for p in payments[1:]] == ["Bonus", "Yol", "Mesai"]
        assert [p.payment_type for p in payments[1:]] == ["ExtraPay", "SocialAid", "Overtime"]
        assert [p.payment_amount for p in payments[1:]] == [5000, 1000, 750]

    def test_calculation_type_net_only_when_net(self):
        extras = [
            ExtraPayment(name="A", amount=1, type="Net"),
            ExtraPayment(name="B", amount=1, type="Gross"),
        ]

        payments = build_payments(extras)

        assert payments[1].calculation_type == "Net"
        assert payments[2].calculation_type == "Gross"
