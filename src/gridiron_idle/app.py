from __future__ import annotations

import argparse
import logging
import time
from typing import Iterable, Optional, Sequence

from .awards import AwardSystem
from .catalog import POSITIONS, POSITION_LABELS, get_drill
from .config import REGULAR_SEASON_WEEKS
from .models import GameState, MatchResult
from .offline import OfflineSummary
from .service import CareerService
from .upgrades import UpgradeStatus


def format_status(state: GameState) -> str:
    player = state.player
    season = state.season
    res = state.resources
    lines = [
        f"{player.name}  {POSITION_LABELS[player.position]}  Age {player.age}  Rating {player.rating}",
        f"Season {season.season_number}  Week {min(season.current_week, REGULAR_SEASON_WEEKS)}  {season.phase}  Record {season.record}",
        f"Money ${res.money:,.0f}  TP {res.training_points:,.1f}  Fame {res.fame:,.0f}  Tokens {res.contract_tokens}",
        "Slot Drill                Target          TP",
    ]
    for idx, slot in enumerate(state.training.slots):
        if slot is None:
            lines.append(f"{idx:>4} {'(empty)':<20}")
            continue
        drill = get_drill(slot.drill_id)
        name = drill.name if drill is not None else slot.drill_id
        target = drill.target_attribute if drill is not None else "?"
        lines.append(f"{idx:>4} {name:<20} {target:<15} {slot.accumulated_tp:>6.1f}")
    return "\n".join(lines)


def format_match(result: MatchResult) -> str:
    outcome = "W" if result.win else "L"
    return (
        f"S{result.season} W{result.week:<2} {outcome} {result.score_line:<6} vs {result.opponent:<12}"
        f" perf {result.performance_score:5.1f}  +{result.xp_earned} XP  +${result.money_earned:,}"
    )


def format_offline_summary(summary: OfflineSummary) -> str:
    if summary.is_empty:
        return "Welcome back!"
    hours = summary.elapsed_seconds / 3600
    lines = [
        f"Away for {hours:.1f}h: +{summary.tp_earned:,.1f} TP, +${summary.money_earned:,.0f}",
    ]
    lines.extend(format_match(result) for result in summary.match_results)
    return "\n".join(lines)


def format_upgrades(statuses: Iterable[UpgradeStatus], title: str, limit: int = 20) -> str:
    lines = [title, "Upgrade                      Lvl  Cost       State"]
    for status in list(statuses)[:limit]:
        if status.maxed:
            label = "maxed"
        elif status.locked:
            label = f"season {status.definition.unlock_season}, fame {status.definition.unlock_fame:g}"
        else:
            label = "ready" if status.can_afford else "saving up"
        lines.append(
            f"{status.definition.name:<28} {status.current_level}/{status.definition.max_level}"
            f"  {status.cost:>9,.0f}  {label}"
        )
    return "\n".join(lines)


def format_legacy(state: GameState, awards: AwardSystem) -> str:
    legacy = state.legacy
    lines = [
        f"Prestige {legacy.prestige_count}  TP x{legacy.tp_multiplier:.2f}  Money x{legacy.money_multiplier:.2f}"
        f"  Starting bonus +{legacy.starting_rating_bonus}",
    ]
    for record in legacy.retired_players:
        honors = ", ".join(awards.label(a) for a in record.awards) or "no awards"
        lines.append(f"  {record.name} ({record.position}) rating {record.rating}, {record.seasons} seasons, {honors}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Gridiron Idle: run a career headless")
    parser.add_argument("--save", default=None, help="path to the career save file")
    parser.add_argument("--seconds", type=float, default=300.0, help="simulated seconds to play")
    parser.add_argument("--step", type=float, default=1.0, help="seconds per tick")
    parser.add_argument("--new", nargs=2, metavar=("NAME", "POSITION"), help="start over with a new career")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = CareerService(save_path=args.save)
    if args.new:
        name, position = args.new
        if position.upper() not in POSITIONS:
            parser.error(f"position must be one of {', '.join(POSITIONS)}")
        service.new_career(name, position)
    else:
        service.resume()
        if service.last_offline_summary is not None:
            print(format_offline_summary(service.last_offline_summary))

    start = time.time()
    elapsed = 0.0
    while elapsed < args.seconds:
        step = min(args.step, args.seconds - elapsed)
        elapsed += step
        result = service.loop.tick(step, now=start + elapsed)
        if result.match is not None:
            print(format_match(result.match))
        for message in service.drain_notifications():
            print(f"  * {message}")

    service.save_manager.save(service.state)
    print()
    print(format_status(service.state))
    print()
    print(format_upgrades(service.upgrades.available_upgrades(service.state), "Available upgrades"))
    if service.state.legacy.prestige_count:
        print()
        print(format_legacy(service.state, service.awards))


if __name__ == "__main__":
    main()
