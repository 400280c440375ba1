import unittest
from careplan.domain.Catalog import DEFAULT_CATALOG
from careplan.domain.Errors import UnknownDefinition
from careplan.domain.Plan import Plan
from careplan.domain.PlanStore import PlanStore
from careplan.domain.ServiceAssignment import ServiceAssignment
from careplan.events.Event_Bus import EventBus
from careplan.logic.billing.cost import compute_cost
from careplan.logic.budget.aggregator import daily_units, monthly_bucket_units, total_monthly_units
from careplan.logic.budget.evaluator import evaluate
from careplan.utilities.constants import MONTHLY_SLOT, WEEKDAYS, WEEKS_PER_MONTH


class TestAggregator(unittest.TestCase):

    def setUp(self):
        self.store = PlanStore(DEFAULT_CATALOG).set_event_bus(EventBus())

    def _closed_form(self, plan):
        weekly = 0
        for day in WEEKDAYS:
            weekly += sum(DEFAULT_CATALOG.service_definition(a.definition_id).units_per_occurrence
                          for a in plan.weekday_slots[day]) * WEEKS_PER_MONTH
        monthly = sum(DEFAULT_CATALOG.service_definition(a.definition_id).units_per_occurrence
                      for a in plan.monthly_bucket)
        return weekly + monthly

    def test_empty_plan_level_three(self):
        plan = self.store.snapshot()
        total = total_monthly_units(plan)
        cap = plan.care_level.max_units
        self.assertEqual(cap, 27048)
        self.assertEqual(total, 0)
        self.assertTrue(evaluate(total, cap).within_limit)
        self.assertEqual(compute_cost(total, cap), 0)

    def test_single_monday_day_service(self):
        self.store.assign("月", "day_service_7")
        plan = self.store.snapshot()
        total = total_monthly_units(plan)
        self.assertEqual(total, 3000)
        self.assertEqual(compute_cost(total, plan.care_level.max_units), 3000)

    def test_monthly_bed_at_level_one(self):
        self.store.set_care_level(1)
        self.store.assign(MONTHLY_SLOT, "rental_bed")
        plan = self.store.snapshot()
        total = total_monthly_units(plan)
        self.assertEqual(plan.care_level.max_units, 16765)
        self.assertEqual(total, 1200)
        self.assertTrue(evaluate(total, plan.care_level.max_units).within_limit)
        self.assertEqual(compute_cost(total, plan.care_level.max_units), 1200)

    def test_over_cap_plan(self):
        # 13 full day services (3000/month each) + one body-care visit (1000/month) = 40000
        for i in range(13):
            self.store.assign(WEEKDAYS[i % 7], "day_service_7")
        self.store.assign("土", "helper_body")
        plan = self.store.snapshot()
        total = total_monthly_units(plan)
        self.assertEqual(total, 40000)
        verdict = evaluate(total, plan.care_level.max_units)
        self.assertFalse(verdict.within_limit)
        self.assertEqual(verdict.overage_units, 12952)
        self.assertEqual(compute_cost(total, plan.care_level.max_units), 156568)

    def test_matches_closed_form(self):
        self.store.assign("月", "day_service_7")
        self.store.assign("月", "helper_life")
        self.store.assign("月", "helper_life")
        self.store.assign("水", "nurse")
        self.store.assign("日", "day_service_5")
        self.store.assign(MONTHLY_SLOT, "rental_bed")
        self.store.assign(MONTHLY_SLOT, "rental_wheelchair")
        plan = self.store.snapshot()
        self.assertEqual(total_monthly_units(plan), self._closed_form(plan))
        self.assertEqual(total_monthly_units(plan), (750 + 183 * 2 + 469 + 580) * 4 + 1800)

    def test_daily_and_monthly_breakdown(self):
        self.store.assign("火", "helper_body")
        self.store.assign("火", "helper_body")
        self.store.assign(MONTHLY_SLOT, "rental_wheelchair")
        plan = self.store.snapshot()
        per_day = daily_units(plan)
        self.assertEqual(per_day["火"], 500)
        self.assertEqual(sum(per_day.values()), 500)
        self.assertEqual(monthly_bucket_units(plan), 600)

    def test_monotonic_under_add_and_remove(self):
        previous = total_monthly_units(self.store.snapshot())
        added = []
        for slot, definition_id in [("月", "nurse"), ("金", "day_service_5"),
                                    (MONTHLY_SLOT, "rental_bed"), ("金", "helper_life")]:
            added.append((slot, self.store.assign(slot, definition_id)))
            current = total_monthly_units(self.store.snapshot())
            self.assertGreaterEqual(current, previous)
            previous = current
        for slot, assignment in added:
            self.store.remove(slot, assignment.instance_id)
            current = total_monthly_units(self.store.snapshot())
            self.assertLessEqual(current, previous)
            previous = current
        self.assertEqual(previous, 0)

    def test_weeks_per_month_can_be_swapped(self):
        self.store.assign("月", "day_service_7")
        self.store.assign(MONTHLY_SLOT, "rental_bed")
        self.assertEqual(total_monthly_units(self.store.snapshot(), weeks_per_month=5), 750 * 5 + 1200)

    def test_plain_plan_value(self):
        plan = Plan(DEFAULT_CATALOG.care_level_by_rank(2))
        self.assertTrue(plan.is_empty())
        self.assertEqual(total_monthly_units(plan), 0)

    def test_unknown_definition_in_plain_plan(self):
        plan = Plan(DEFAULT_CATALOG.care_level_by_rank(3),
                    {"月": [ServiceAssignment("nurse", "n1"), ServiceAssignment("retired", "r1")]})
        with self.assertRaises(UnknownDefinition) as ctx:
            daily_units(plan)
        self.assertEqual(ctx.exception.definition_id, "retired")
        with self.assertRaises(UnknownDefinition):
            total_monthly_units(plan)


if __name__ == '__main__':
    unittest.main()
