"""Read-only drill and upgrade definitions, keyed by id."""
from __future__ import annotations

from dataclasses import dataclass

POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE", "LB", "CB", "S")
OFFENSE_POSITIONS = {"QB", "RB", "WR", "TE"}
DEFENSE_POSITIONS = {"LB", "CB", "S"}

POSITION_LABELS: dict[str, str] = {
    "QB": "Quarterback",
    "RB": "Running Back",
    "WR": "Wide Receiver",
    "TE": "Tight End",
    "LB": "Linebacker",
    "CB": "Cornerback",
    "S": "Safety",
}

ATTRIBUTE_KEYS: tuple[str, ...] = (
    "speed",
    "strength",
    "stamina",
    "awareness",
    "throw_power",
    "throw_accuracy",
    "mobility",
    "catching",
    "route_running",
    "ball_carrying",
    "elusiveness",
    "tackle",
    "coverage",
    "pursuit",
)

DRILL_TYPES: tuple[str, ...] = (
    "sprint",
    "weight_room",
    "route_running",
    "throwing_mechanics",
    "film_study",
    "agility",
    "coverage",
    "playbook_study",
    "blocking_technique",
)

EFFECT_KINDS: tuple[str, ...] = (
    "slot_unlock",
    "attribute_bonus",
    "drill_multiplier",
    "match_bonus",
    "passive_income",
)

CURRENCIES = {"money", "contract_tokens"}


@dataclass(frozen=True, slots=True)
class DrillDefinition:
    id: str
    name: str
    drill_type: str
    target_attribute: str
    base_rate: float
    cost: float
    unlock_season: int
    description: str = ""


@dataclass(frozen=True, slots=True)
class UpgradeEffect:
    kind: str
    magnitude: float
    target_attribute: str | None = None
    target_drill_type: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in EFFECT_KINDS:
            raise ValueError(f"Unknown upgrade effect kind '{self.kind}'")


@dataclass(frozen=True, slots=True)
class UpgradeDefinition:
    id: str
    name: str
    description: str
    category: str
    cost_per_level: float
    currency: str
    effect: UpgradeEffect
    max_level: int
    unlock_season: int
    unlock_fame: float
    positions: tuple[str, ...] | None = None

    def allows_position(self, position: str) -> bool:
        return self.positions is None or position in self.positions

    def cost_for_level(self, current_level: int) -> float:
        return self.cost_per_level * (current_level + 1)


DRILL_DEFINITIONS: tuple[DrillDefinition, ...] = (
    DrillDefinition("sprint_track", "Track Sprints", "sprint", "speed", 0.5, 0, 0,
                    "Run timed 40-yard dashes to build explosive speed."),
    DrillDefinition("weight_room_basic", "Weight Room", "weight_room", "strength", 0.4, 0, 0,
                    "Core lifts to build functional strength."),
    DrillDefinition("film_study", "Film Study", "film_study", "awareness", 0.35, 0, 0,
                    "Watch game tape to understand opposing defenses."),
    DrillDefinition("agility_ladder", "Agility Ladder", "agility", "elusiveness", 0.4, 500, 1,
                    "Ladder drills to sharpen lateral quickness."),
    DrillDefinition("route_running_cones", "Cone Routes", "route_running", "route_running", 0.45, 750, 1,
                    "Run precise routes around cones to perfect timing."),
    DrillDefinition("throwing_mechanics", "QB Mechanics", "throwing_mechanics", "throw_accuracy", 0.5, 0, 0,
                    "Work on footwork and release mechanics."),
    DrillDefinition("coverage_drills", "DB Coverage", "coverage", "coverage", 0.45, 600, 1,
                    "Mirror drills and zone coverage assignments."),
    DrillDefinition("playbook_study", "Playbook Study", "playbook_study", "awareness", 0.6, 1000, 2,
                    "Deep playbook memorization to read plays faster."),
    DrillDefinition("blocking_tech", "Blocking Tech", "blocking_technique", "strength", 0.55, 800, 2,
                    "Hand placement and leverage techniques."),
    DrillDefinition("endurance_camp", "Endurance Camp", "sprint", "stamina", 0.4, 500, 1,
                    "Long-distance runs and conditioning circuits."),
    DrillDefinition("throw_power_training", "Arm Strength", "throwing_mechanics", "throw_power", 0.45, 1500, 3,
                    "Resistance band throws to build arm strength."),
    DrillDefinition("hands_camp", "Hands Camp", "route_running", "catching", 0.5, 1200, 2,
                    "JUGS machine reps to soften hands."),
    DrillDefinition("tackle_circuit", "Tackle Circuit", "weight_room", "tackle", 0.5, 0, 0,
                    "Pad drills and wrap-up technique to improve tackling fundamentals."),
    DrillDefinition("pursuit_drills", "Pursuit Drills", "sprint", "pursuit", 0.45, 400, 1,
                    "Angle pursuit training to cut off ball carriers and run down plays."),
)


def _upgrade(
    upgrade_id: str,
    name: str,
    description: str,
    category: str,
    cost_per_level: float,
    effect: UpgradeEffect,
    max_level: int,
    unlock_season: int,
    unlock_fame: float,
    positions: tuple[str, ...] | None = None,
    currency: str = "money",
) -> UpgradeDefinition:
    return UpgradeDefinition(
        id=upgrade_id,
        name=name,
        description=description,
        category=category,
        cost_per_level=cost_per_level,
        currency=currency,
        effect=effect,
        max_level=max_level,
        unlock_season=unlock_season,
        unlock_fame=unlock_fame,
        positions=positions,
    )


UPGRADE_DEFINITIONS: tuple[UpgradeDefinition, ...] = (
    # Equipment
    _upgrade("cleats_basic", "Pro Cleats", "High-traction cleats that improve on-field performance.",
             "equipment", 2000, UpgradeEffect("match_bonus", 1.5), 3, 0, 0),
    _upgrade("gloves", "Receiver Gloves", "Sticky gloves that boost catching consistency.",
             "equipment", 1500, UpgradeEffect("attribute_bonus", 2, target_attribute="catching"), 3, 0, 0),
    _upgrade("helmet_pro", "Pro Helmet", "Reduces fatigue, improving stamina in tough games.",
             "equipment", 3000, UpgradeEffect("attribute_bonus", 2, target_attribute="stamina"), 3, 1, 10),
    # Coaches
    _upgrade("qb_coach", "QB Coach", "Expert coach that boosts throwing drill speed by 25%.",
             "coach", 5000, UpgradeEffect("drill_multiplier", 0.25, target_drill_type="throwing_mechanics"),
             3, 1, 20, positions=("QB",)),
    _upgrade("speed_coach", "Speed Coach", "Specialized sprint coach that boosts sprint drill speed by 25%.",
             "coach", 5000, UpgradeEffect("drill_multiplier", 0.25, target_drill_type="sprint"), 3, 1, 20),
    _upgrade("extra_slot", "Extra Drill Slot", "Unlock an additional training drill slot.",
             "coach", 8000, UpgradeEffect("slot_unlock", 1), 2, 2, 50),
    # Diet
    _upgrade("nutrition_plan", "Nutrition Plan", "Optimized diet that boosts all training rates by 15%.",
             "diet", 4000, UpgradeEffect("drill_multiplier", 0.15), 3, 1, 30),
    # Endorsements
    _upgrade("local_sponsor", "Local Sponsor", "A local business deal that pays $100/min passively.",
             "endorsement", 3000, UpgradeEffect("passive_income", 100 / 60), 3, 1, 15),
    _upgrade("national_deal", "National Deal", "A national brand deal paying $500/min passively.",
             "endorsement", 20000, UpgradeEffect("passive_income", 500 / 60), 5, 3, 100),
    # Tier 2
    _upgrade("recovery_pool", "Recovery Pool", "Ice baths and cryotherapy protocols. Boosts Stamina permanently.",
             "diet", 6000, UpgradeEffect("attribute_bonus", 2, target_attribute="stamina"), 3, 2, 30),
    _upgrade("film_suite", "Advanced Film Suite", "High-end film technology that boosts Film Study drill speed by 30%.",
             "coach", 8000, UpgradeEffect("drill_multiplier", 0.30, target_drill_type="film_study"), 3, 2, 30),
    _upgrade("regional_sponsor", "Regional Sponsor", "A regional brand partnership paying $250/min passively.",
             "endorsement", 10000, UpgradeEffect("passive_income", 250 / 60), 3, 3, 50),
    # Tier 3
    _upgrade("elite_equipment", "Elite Equipment Set", "Professional-grade gear. Significant match performance bonus.",
             "equipment", 20000, UpgradeEffect("match_bonus", 3), 3, 5, 150),
    _upgrade("performance_analyst", "Performance Analyst", "A full-time data scientist tracking every rep. All drills +15%.",
             "coach", 25000, UpgradeEffect("drill_multiplier", 0.15), 3, 5, 150),
    _upgrade("signature_endorsement", "Signature Endorsement", "Your own signature line generating $600/min passively.",
             "endorsement", 75000, UpgradeEffect("passive_income", 600 / 60), 3, 6, 250),
    # Tier 4
    _upgrade("personal_trainer", "Personal Performance Coach", "A full-time live-in coach on staff. All drill rates +25%.",
             "diet", 100000, UpgradeEffect("drill_multiplier", 0.25), 2, 8, 400),
    _upgrade("hof_preparation", "Hall of Fame Gear", "The pinnacle of equipment. Meaningful match performance bonus.",
             "equipment", 200000, UpgradeEffect("match_bonus", 6), 1, 10, 600),
    _upgrade("mega_deal", "Mega Endorsement Deal", "A generational endorsement deal paying $5,000/min passively.",
             "endorsement", 250000, UpgradeEffect("passive_income", 5000 / 60), 3, 10, 600),
    # QB
    _upgrade("qb_elite_coaching", "Elite QB Coaching", "Footwork and release coaching. Throwing drill speed +40%.",
             "coach", 8000, UpgradeEffect("drill_multiplier", 0.40, target_drill_type="throwing_mechanics"),
             3, 2, 25, positions=("QB",)),
    _upgrade("pocket_presence", "Pocket Presence Training", "Reading the rush. Boosts Throw Accuracy permanently.",
             "equipment", 10000, UpgradeEffect("attribute_bonus", 2, target_attribute="throw_accuracy"),
             3, 3, 50, positions=("QB",)),
    _upgrade("qb_mentor", "QB Mentor Program", "A legendary QB mentors your mechanics and IQ. All drill rates +30%.",
             "coach", 40000, UpgradeEffect("drill_multiplier", 0.30), 3, 6, 200, positions=("QB",)),
    # WR / TE
    _upgrade("receiver_route_coach", "Route Running Coach", "Route specialist for every stem and break. Route drills +40%.",
             "coach", 8000, UpgradeEffect("drill_multiplier", 0.40, target_drill_type="route_running"),
             3, 2, 25, positions=("WR", "TE")),
    _upgrade("hands_specialist", "Hands Specialist", "Elite catching drills to eliminate drops. Boosts Catching permanently.",
             "equipment", 7000, UpgradeEffect("attribute_bonus", 3, target_attribute="catching"),
             3, 2, 25, positions=("WR", "TE")),
    _upgrade("elite_receiver_program", "Elite Receiver Camp", "Exclusive camp with top receiving coaches.",
             "equipment", 30000, UpgradeEffect("match_bonus", 4), 3, 5, 150, positions=("WR", "TE")),
    # RB
    _upgrade("rb_vision_coach", "Vision Training Coach", "Read blocking schemes and find lanes. Film Study drill +40%.",
             "coach", 8000, UpgradeEffect("drill_multiplier", 0.40, target_drill_type="film_study"),
             3, 2, 25, positions=("RB",)),
    _upgrade("agility_specialist", "Agility Specialist", "One-cut and juke training. Boosts Elusiveness permanently.",
             "equipment", 7000, UpgradeEffect("attribute_bonus", 3, target_attribute="elusiveness"),
             3, 2, 25, positions=("RB",)),
    _upgrade("elite_rb_program", "Elite RB Camp", "Exclusive camp with former all-pro backs.",
             "equipment", 30000, UpgradeEffect("match_bonus", 4), 3, 5, 150, positions=("RB",)),
    # LB
    _upgrade("pass_rush_coach", "Pass Rush Coach", "Blitz packages and edge rush techniques. Weight Room drill +40%.",
             "coach", 8000, UpgradeEffect("drill_multiplier", 0.40, target_drill_type="weight_room"),
             3, 2, 25, positions=("LB",)),
    _upgrade("lb_instincts", "Linebacker Instincts", "Reaction and pursuit angle training. Boosts Tackle permanently.",
             "equipment", 7000, UpgradeEffect("attribute_bonus", 3, target_attribute="tackle"),
             3, 2, 25, positions=("LB",)),
    _upgrade("elite_lb_program", "Elite Linebacker Camp", "Train with the best defensive minds in football.",
             "equipment", 30000, UpgradeEffect("match_bonus", 4), 3, 5, 150, positions=("LB",)),
    # CB / S
    _upgrade("coverage_specialist", "Coverage Specialist", "Press, zone and man coverage training. Coverage drill +40%.",
             "coach", 8000, UpgradeEffect("drill_multiplier", 0.40, target_drill_type="coverage"),
             3, 2, 25, positions=("CB", "S")),
    _upgrade("db_instincts", "DB Instincts Training", "Ball tracking and route recognition. Boosts Coverage permanently.",
             "equipment", 7000, UpgradeEffect("attribute_bonus", 3, target_attribute="coverage"),
             3, 2, 25, positions=("CB", "S")),
    _upgrade("elite_db_program", "Elite DB Camp", "Shutdown corner and center field training with legendary DBs.",
             "equipment", 30000, UpgradeEffect("match_bonus", 4), 3, 5, 150, positions=("CB", "S")),
)

DRILLS_BY_ID: dict[str, DrillDefinition] = {d.id: d for d in DRILL_DEFINITIONS}
UPGRADES_BY_ID: dict[str, UpgradeDefinition] = {u.id: u for u in UPGRADE_DEFINITIONS}

STARTING_DRILLS: dict[str, tuple[str, ...]] = {
    "QB": ("sprint_track", "weight_room_basic", "film_study", "throwing_mechanics"),
    "WR": ("sprint_track", "weight_room_basic", "film_study", "route_running_cones"),
    "TE": ("sprint_track", "weight_room_basic", "film_study", "route_running_cones"),
    "RB": ("sprint_track", "weight_room_basic", "film_study", "agility_ladder"),
    "LB": ("tackle_circuit", "weight_room_basic", "film_study", "endurance_camp"),
    "CB": ("tackle_circuit", "sprint_track", "film_study", "coverage_drills"),
    "S": ("tackle_circuit", "sprint_track", "film_study", "coverage_drills"),
}


def get_drill(drill_id: str) -> DrillDefinition | None:
    return DRILLS_BY_ID.get(drill_id)


def get_upgrade(upgrade_id: str) -> UpgradeDefinition | None:
    return UPGRADES_BY_ID.get(upgrade_id)


def starting_drill_ids(position: str) -> list[str]:
    return list(STARTING_DRILLS.get(position, ("sprint_track", "weight_room_basic", "film_study")))
