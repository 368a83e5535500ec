"""Command line entry point: upload statements to a running API, or initialize the database."""
import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from commission_tracker.core.config import settings
from commission_tracker.services.assistant import AssistantStub
from commission_tracker.services.client import build_client
from commission_tracker.services.dashboard import DashboardClient, DashboardSession
from commission_tracker.services.upload import SelectedFile, UploadPipeline, is_allowed_file


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="commission-tracker", description="Commission statement tracker.")
    sub = p.add_subparsers(dest="command", required=True)

    up = sub.add_parser("upload", help="Upload statements and print the refreshed dashboard")
    up.add_argument("files", nargs="+", type=Path)
    up.add_argument("--api-url", default=None, help=f"API base URL (default {settings.API_BASE_URL})")
    up.add_argument("--concurrency", type=int, default=None, help="Files submitted at once")
    up.add_argument("--ask", default=None, help="Question for the assistant about this batch")

    sub.add_parser("init-db", help="Create tables and seed demo reps")
    return p.parse_args(argv)


async def run_upload(
    files: List[Path],
    api_url: Optional[str] = None,
    concurrency: Optional[int] = None,
    question: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    selected = [SelectedFile.from_path(path) for path in files]

    async with build_client(api_url, transport) as client:
        session = DashboardSession(DashboardClient(client))
        session.start_processing([f.name for f in selected if is_allowed_file(f)])
        pipeline = UploadPipeline(
            client,
            concurrency=concurrency,
            on_parsed=session.handle_parsed_data,
            on_file_processed=session.handle_file_processed,
        )
        batch = await pipeline.run(selected)

        await session.wait_for_refresh()
        if session.summary is None:
            await session.refresh()

        output: Dict[str, Any] = {
            "state": batch.state.value,
            "notice": batch.notice,
            "results": [r.model_dump(by_alias=True) for r in batch.results],
            "failed": batch.failed,
            "dashboard": session.summary.model_dump(mode="json") if session.summary else None,
        }
        if question:
            output["assistant"] = await AssistantStub().respond(question, session.parsed_results)
        return output


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)

    if args.command == "init-db":
        from commission_tracker.main import init_database
        init_database()
        return

    result = asyncio.run(run_upload(args.files, args.api_url, args.concurrency, args.ask))
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
