import argparse, json, logging, sys

from pydantic import ValidationError

#-----------------------------------------------------------------------------

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habitlens",
        description="Aggregates habit completion logs into weekly or monthly chart series."
    )

    parser.add_argument("config", nargs="*", help="YAML config files")
    parser.add_argument("--events", help="JSON export of habit completion logs")
    parser.add_argument("--profile", help="JSON user profile; prints the matched rule and analysis")
    parser.add_argument("--by-habit", action="store_true", help="Aggregate each habit separately")
    parser.add_argument("--show-config", action="store_true", help="Print the effective configuration and exit")

    return parser

#-----------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.events and not args.show_config:
        parser.error("the following arguments are required: --events")

    from habitlens.utils import Config
    config = Config.init(yaml_filenames=args.config)

    if args.show_config:
        config.print()
        return 0

    from habitlens.habits import CompletionAggregateService
    service = CompletionAggregateService(config)

    try:
        events = service.load_events(args.events)

        if args.by_habit:
            results, skipped = service.aggregate_by_habit(events)

            # A list keeps int and str habit ids with the same text apart.
            output = {
                "habits": [
                    {"habitId": habit_id, **result.to_dict()}
                    for habit_id, result in results.items()
                ],
                "skipped": skipped
            }
        else:
            output = service.aggregate(events).to_dict()

        if args.profile:
            from habitlens.agent import UserProfile, analyze_user_profile, find_matching_rule, generate_recommendation_plan

            with open(args.profile, "r", encoding="utf-8") as f:
                profile = UserProfile.model_validate(json.load(f))

            analysis = analyze_user_profile(profile)
            rule = find_matching_rule(profile)

            output["agent"] = {
                "rule"      : rule.model_dump() if rule else None,
                "analysis"  : analysis.to_dict(),
                "plan"      : generate_recommendation_plan(profile, analysis).to_dict()
            }

    except FileNotFoundError as e:
        logging.error(f"File error: {e}")
        return 1
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        logging.error(f"Data error: {e}")
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0

#-----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

#-----------------------------------------------------------------------------
