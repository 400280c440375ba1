import unittest
from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.PlanStore import PlanStore
from careplan.events.Event_Bus import EventBus
from careplan.infra.pdf_utils import generate_pdf_for_plan
from careplan.logic.reporting.summary import compute_plan_summary
from careplan.utilities.constants import MONTHLY_SLOT


class TestPlanSummary(unittest.TestCase):

    def setUp(self):
        self.store = PlanStore(DEFAULT_CATALOG).set_event_bus(EventBus())

    def test_empty_summary(self):
        summary = compute_plan_summary(self.store.snapshot())
        self.assertEqual(summary["total_units"], 0)
        self.assertEqual(summary["cap"], 27048)
        self.assertTrue(summary["within_limit"])
        self.assertEqual(summary["overage_units"], 0)
        self.assertEqual(summary["usage_percent"], 0.0)
        self.assertEqual(summary["cost"], 0)
        self.assertEqual(len(summary["days"]), 7)

    def test_breakdown(self):
        a = self.store.assign("月", "day_service_7")
        self.store.assign("月", "helper_body")
        self.store.assign(MONTHLY_SLOT, "rental_bed")
        summary = compute_plan_summary(self.store.snapshot())
        monday = summary["days"]["月"]
        self.assertEqual(monday["units_per_day"], 1000)
        self.assertEqual(monday["monthly_units"], 4000)
        self.assertEqual(monday["services"][0]["instance_id"], a.instance_id)
        self.assertEqual(monday["services"][0]["name"], "デイサービス (7-8時間)")
        self.assertEqual(summary["days"]["火"]["services"], [])
        self.assertEqual(summary["monthly"]["units"], 1200)
        self.assertEqual(summary["total_units"], 5200)
        self.assertEqual(summary["cost"], 5200)

    def test_over_limit_summary(self):
        self.store.set_care_level(1)
        for day in ("月", "火", "水", "木", "金", "土"):
            self.store.assign(day, "day_service_7")
        summary = compute_plan_summary(self.store.snapshot())
        self.assertFalse(summary["within_limit"])
        self.assertEqual(summary["overage_units"], 18000 - 16765)
        self.assertEqual(summary["usage_percent"], 100.0)
        self.assertEqual(summary["cost"], 16765 + 1235 * 10)

    def test_custom_pricing(self):
        self.store.assign("月", "day_service_7")
        summary = compute_plan_summary(self.store.snapshot(), unit_price=11, co_pay_ratio="0.2")
        self.assertEqual(summary["cost"], 6600)

    def test_pdf_export(self):
        self.store.assign("月", "day_service_7")
        self.store.assign(MONTHLY_SLOT, "rental_wheelchair")
        pdf = generate_pdf_for_plan(self.store.snapshot())
        self.assertTrue(pdf.startswith(b"%PDF"))
        self.assertGreater(len(pdf), 500)


if __name__ == '__main__':
    unittest.main()
