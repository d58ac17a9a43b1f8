"""Send a Recall bot into a meeting (or follow an existing one) and poll it to a decision."""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.analysis.analyzer import get_analyzer
from src.config import settings
from src.errors import MeetingRecallError
from src.pipeline_config import PollingConfig, RecallConfig
from src.recall.client import RecallClient
from src.recall.orchestrator import CancellationToken, PollingOrchestrator, PollOutcome


def _print_outcome(outcome: PollOutcome) -> None:
    if outcome.decision is not None:
        return
    if outcome.error:
        print(f"[{outcome.status}] error: {outcome.error}")
    elif outcome.transcript_not_ready:
        print(f"[{outcome.status}] {outcome.hint}")
    else:
        print(f"[{outcome.status}] waiting...")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--meeting-url", help="Meeting link to send a new bot into")
    target.add_argument("--bot-id", help="Existing bot ID to keep polling")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.poll_interval_seconds,
        help="Seconds to wait between status checks",
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cancel = CancellationToken()
    try:
        with RecallClient(RecallConfig.from_settings(settings)) as client:
            orchestrator = PollingOrchestrator(
                client,
                analyzer=lambda: get_analyzer(settings),
                polling=PollingConfig(interval_seconds=args.interval),
            )
            bot_id = args.bot_id or orchestrator.start_job(args.meeting_url)
            print(f"Following bot {bot_id} (Ctrl-C to stop)")

            outcome = orchestrator.run(bot_id, cancel=cancel, on_outcome=_print_outcome)
    except KeyboardInterrupt:
        cancel.cancel()
        print("\nStopped polling.")
        return 130
    except MeetingRecallError as exc:
        print(f"Error ({exc.kind}): {exc.message}", file=sys.stderr)
        return 1

    if outcome is None:
        return 130
    if outcome.decision is None:
        return 1

    print(json.dumps(outcome.decision.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
