"""Sugar reduction plans: weekly gram limits and daily guidance.

Both plans run for 13 weeks counted from the streak's start date. The gradual
plan steps down from 50 g by 5 g a week and drops from 20 g to zero in week 8;
cold turkey allows nothing from the first day.
"""

from datetime import date

from habit_engine.domain.checkins import CheckIn
from habit_engine.domain.plans import PlanDetails, PlanGuidance, PlanType, WeeklyLimit

DAYS_PER_WEEK = 7

GRADUAL_PLAN = PlanDetails(
    type=PlanType.GRADUAL,
    name="Gradual Reduction",
    tagline="90 days to lasting change",
    description=(
        "Reduce sugar intake progressively over 13 weeks, starting at 50g and "
        "reaching zero at week 8."
    ),
    weekly_limits=(
        WeeklyLimit(
            1,
            50,
            "Starting Point",
            "Begin at 50g/day. Most people consume 70-100g, so this is already "
            "a reduction.",
        ),
        WeeklyLimit(
            2,
            45,
            "First Step Down",
            "Down to 45g. Your body is beginning to adjust to less sugar.",
        ),
        WeeklyLimit(
            3,
            40,
            "Building Momentum",
            "Down to 40g. Cravings are starting to decrease noticeably.",
        ),
        WeeklyLimit(
            4,
            35,
            "Taste Bud Reset",
            "Your taste buds are becoming more sensitive to sweetness.",
        ),
        WeeklyLimit(
            5,
            30,
            "WHO Recommended",
            "At 30g, you're at the WHO recommended limit for added sugar.",
        ),
        WeeklyLimit(
            6,
            25,
            "Getting Close",
            "25g daily. Your dependency on sugar is breaking down.",
        ),
        WeeklyLimit(
            7,
            20,
            "Final Step Before Zero",
            "Just 20g left. Next week you make the jump to zero!",
        ),
        WeeklyLimit(
            8,
            0,
            "Sugar-Free!",
            "Zero added sugar! Now maintain for full neural rewiring.",
        ),
        WeeklyLimit(
            9,
            0,
            "Maintaining Zero",
            "Staying at zero. Your brain is rewiring its reward pathways.",
        ),
        WeeklyLimit(
            10,
            0,
            "New Normal",
            "Sugar-free is becoming automatic. Processed sugar seems too sweet.",
        ),
        WeeklyLimit(
            11,
            0,
            "Habit Locked In",
            "66+ days sugar-free, habit formation complete.",
        ),
        WeeklyLimit(
            12,
            0,
            "Almost Complete",
            "Neural pathways fully rewired. Sugar freedom is permanent.",
        ),
        WeeklyLimit(
            13,
            0,
            "90 Days Complete!",
            "90 days sugar-free! The habit is now automatic.",
        ),
    ),
    tips=(
        "Track your intake to stay within limits.",
        "Front-load your sugar allowance if needed.",
        "Choose whole fruits over processed sweets.",
        "Read labels - sugar hides in unexpected places.",
        "Each gram you save is progress.",
    ),
)

COLD_TURKEY_PLAN = PlanDetails(
    type=PlanType.COLD_TURKEY,
    name="Cold Turkey",
    tagline="Complete commitment for 90 days",
    description=(
        "Zero added sugar from day one. This requires discipline but produces "
        "faster results."
    ),
    weekly_limits=tuple(
        WeeklyLimit(week, 0, title, description)
        for week, (title, description) in enumerate(
            [
                (
                    "The Hardest Week",
                    "Days 1-3 are when cravings peak. Your dopamine system is "
                    "adjusting.",
                ),
                (
                    "Taste Reset",
                    "Cravings diminish. Natural foods start tasting sweeter.",
                ),
                ("New Normal", "Sugar-free is becoming your default state."),
                ("21-Day Mark", "Traditional habit formation milestone reached."),
                ("Mental Clarity", "Energy levels stabilize. Brain fog lifts."),
                ("Halfway There", "42 days complete! Sugar cravings rare now."),
                ("Steady State", "Your body has adapted to zero sugar."),
                ("Auto-Pilot", "Avoiding sugar is automatic now."),
                ("66-Day Mark", "Scientific habit formation complete."),
                ("Deep Rewiring", "Neural pathways firmly established."),
                ("Almost There", "Just 2 weeks to full 90-day reset."),
                ("Final Stretch", "The finish line is in sight!"),
                ("Champion", "90 days sugar-free! Your brain is fully rewired."),
            ],
            start=1,
        )
    ),
    tips=(
        "Drink water when cravings hit.",
        "Go for a short walk to reset.",
        "Remember: cravings pass in 15-20 minutes.",
        "Focus on protein-rich snacks.",
        "Check nutrition labels carefully.",
    ),
)

PLANS = {plan.type: plan for plan in (GRADUAL_PLAN, COLD_TURKEY_PLAN)}


def parse_plan_type(value: str | None) -> PlanType:
    """Parse a plan name, defaulting to the gradual plan."""
    if not value:
        return PlanType.GRADUAL
    normalized = value.strip().lower().replace("-", "_")
    if normalized == PlanType.COLD_TURKEY.value:
        return PlanType.COLD_TURKEY
    return PlanType.GRADUAL


def plan_details(plan_type: PlanType) -> PlanDetails:
    return PLANS[plan_type]


def current_week(start_date: date, today: date) -> int:
    """Return the 1-based plan week containing today."""
    elapsed = max(0, (today - start_date).days)
    return elapsed // DAYS_PER_WEEK + 1


def daily_limit(plan_type: PlanType, start_date: date, today: date) -> WeeklyLimit:
    """Return the limit for today's week, holding the last week once finished."""
    limits = plan_details(plan_type).weekly_limits
    index = min(current_week(start_date, today), len(limits)) - 1
    return limits[index]


def format_progress(plan_type: PlanType, start_date: date, today: date) -> str:
    total = len(plan_details(plan_type).weekly_limits)
    week = current_week(start_date, today)
    if week > total:
        return "Plan complete! Maintaining sugar-free lifestyle."
    return f"Week {week} of {total}"


def today_guidance(
    plan_type: PlanType,
    start_date: date,
    today: date,
    check_in: CheckIn | None = None,
) -> PlanGuidance:
    """Return today's limit, a tip and how today's check-in compares."""
    plan = plan_details(plan_type)
    total = len(plan.weekly_limits)
    week = current_week(start_date, today)
    limit = daily_limit(plan_type, start_date, today)
    # Rotate tips by day so the same day always shows the same tip.
    elapsed = max(0, (today - start_date).days)
    tip = plan.tips[elapsed % len(plan.tips)]
    grams = _grams_consumed(check_in)
    return PlanGuidance(
        plan=plan_type,
        day=today,
        week_number=min(week, total),
        total_weeks=total,
        limit_grams=limit.daily_grams,
        title=limit.title,
        description=limit.description,
        tip=tip,
        is_complete=week > total,
        progress=format_progress(plan_type, start_date, today),
        grams_consumed=grams,
        within_limit=None if grams is None else grams <= limit.daily_grams,
    )


def _grams_consumed(check_in: CheckIn | None) -> float | None:
    if check_in is None:
        return None
    if check_in.grams_consumed is not None:
        return check_in.grams_consumed
    # A sugar-free day without an amount means no added sugar.
    return 0.0 if check_in.sugar_free else None
