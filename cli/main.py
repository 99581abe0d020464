from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from app import JobBoardFacade
from domain.models import AppConfig, ApplicationType, AuthUser, Job, JobDraft, JobFilters
from domain.services import SALARY_THRESHOLDS
from domain.utils import format_money, format_salary, split_csv
from infra.auth import LocalAuthProvider
from infra.config import ConfigFileError, FileSystemConfigProvider
from infra.interaction import ConsoleNotifier
from infra.persistence import SQLiteJobRepository, SQLiteSavedJobRepository
from infra.runtime import StructuredLogger, SystemClock, UuidIdGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nichejobs")
    parser.add_argument("--config-dir", default="./config", help="Path to config folder")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("validate-config")

    login_p = sub.add_parser("login", help="Sign in as a local user")
    login_p.add_argument("user_id")
    login_p.add_argument("email")
    sub.add_parser("logout")

    list_p = sub.add_parser("list", help="List jobs matching the given filters")
    list_p.add_argument("--query", default="")
    list_p.add_argument("--location", default="")
    list_p.add_argument("--type", dest="employment_type", default="")
    list_p.add_argument("--level", dest="experience_level", default="")
    list_p.add_argument(
        "--min-salary",
        dest="salary_min",
        default="",
        help=f"Minimum salary, e.g. one of {', '.join(str(t) for t in SALARY_THRESHOLDS)}",
    )

    sub.add_parser("options", help="Show the filter choices for loaded jobs")

    post_p = sub.add_parser("post", help="Post a new job")
    post_p.add_argument("--title", required=True)
    post_p.add_argument("--company", required=True)
    post_p.add_argument("--location", required=True)
    post_p.add_argument("--description", required=True)
    post_p.add_argument("--type", dest="employment_type", required=True)
    post_p.add_argument("--level", dest="experience_level", required=True)
    post_p.add_argument("--salary-min", type=int)
    post_p.add_argument("--salary-max", type=int)
    post_p.add_argument("--currency")
    post_p.add_argument("--tags", default="", help="Comma-separated tags")
    post_p.add_argument("--requirements")
    post_p.add_argument("--benefits")
    post_p.add_argument("--apply-email")
    post_p.add_argument("--apply-link")

    toggle_p = sub.add_parser("toggle-save", help="Save or unsave a job")
    toggle_p.add_argument("job_id")

    sub.add_parser("saved", help="List saved jobs")

    show_p = sub.add_parser("show", help="Show one job in detail")
    show_p.add_argument("job_id")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config_provider = FileSystemConfigProvider(args.config_dir)

    errors = config_provider.validate()
    if args.command == "validate-config":
        if errors:
            _print_errors(errors)
            return 1
        print(f"Config OK: {config_provider.config_path}")
        return 0

    auth = LocalAuthProvider(config_provider)
    if args.command in ("login", "logout"):
        try:
            if args.command == "login":
                asyncio.run(auth.sign_in(AuthUser(id=args.user_id, email=args.email)))
                print(f"Signed in as {args.email}")
            else:
                asyncio.run(auth.sign_out())
                print("Signed out")
        except ConfigFileError as exc:
            _print_errors([str(exc)])
            return 1
        return 0

    if errors:
        _print_errors(errors)
        return 1

    cfg = config_provider.get_config()
    return asyncio.run(_run(args, cfg, auth))


def _print_errors(errors: Sequence[str]) -> None:
    print("Config validation failed:")
    for err in errors:
        print(f"  - {err}")


async def _run(args: argparse.Namespace, cfg: AppConfig, auth: LocalAuthProvider) -> int:
    logger = StructuredLogger(min_level=cfg.log_level)
    with SQLiteJobRepository(db_path=cfg.db_path) as job_repo, SQLiteSavedJobRepository(
        db_path=cfg.db_path,
    ) as saved_repo:
        facade = JobBoardFacade(
            auth=auth,
            job_repo=job_repo,
            saved_repo=saved_repo,
            notifier=ConsoleNotifier(),
            clock=SystemClock(),
            id_generator=UuidIdGenerator(),
            logger=logger,
            config=cfg,
        )
        await facade.start()
        try:
            if facade.user is None:
                print("Not signed in. Run: nichejobs login <user-id> <email>")
                return 1
            return await _dispatch(args, cfg, facade)
        finally:
            facade.stop()


async def _dispatch(args: argparse.Namespace, cfg: AppConfig, facade: JobBoardFacade) -> int:
    if args.command == "list":
        facade.apply_filters(
            JobFilters(
                query=args.query,
                location=args.location,
                employment_type=args.employment_type,
                experience_level=args.experience_level,
                salary_min=args.salary_min,
            )
        )
        print(facade.board.result_summary)
        for job in facade.visible_jobs:
            print(_job_line(job, saved=facade.is_saved(job.id)))
        return 0

    if args.command == "options":
        options = facade.filter_options
        print(f"Locations: {', '.join(options.locations) or '-'}")
        print(f"Job types: {', '.join(options.employment_types) or '-'}")
        print(f"Experience: {', '.join(options.experience_levels) or '-'}")
        print(f"Minimum salary: {', '.join(format_money(t) + '+' for t in SALARY_THRESHOLDS)}")
        return 0

    if args.command == "post":
        application_type = ApplicationType.LINK if args.apply_link else ApplicationType.EMAIL
        draft = JobDraft(
            title=args.title,
            company=args.company,
            location=args.location,
            description=args.description,
            employment_type=args.employment_type,
            experience_level=args.experience_level,
            salary_min=args.salary_min,
            salary_max=args.salary_max,
            salary_currency=args.currency or cfg.default_currency,
            tags=split_csv(args.tags),
            requirements=args.requirements,
            benefits=args.benefits,
            application_type=application_type,
            application_email=args.apply_email,
            application_link=args.apply_link,
        )
        job = await facade.post_job(draft)
        if job is None:
            return 1
        print(f"id={job.id}")
        return 0

    if args.command == "toggle-save":
        result = await facade.toggle_save(args.job_id)
        return 0 if result.ok else 1

    if args.command == "saved":
        views = facade.saved_jobs()
        print(f"Saved Jobs ({len(views)})")
        for view in views:
            saved_on = view.mark.created_at.date().isoformat()
            print(f"{_job_line(view.job, saved=True)} | saved {saved_on}")
        return 0

    if args.command == "show":
        details = facade.job_details(args.job_id)
        if details is None:
            print(f"Job not found: {args.job_id}")
            return 1
        job = details.job
        print(f"{job.title} at {job.company}{' [saved]' if details.is_saved else ''}")
        print(f"{job.location} | {job.employment_type} | {job.experience_level}")
        print(details.salary_text)
        print(job.description)
        if job.requirements:
            print(f"Requirements: {job.requirements}")
        if job.benefits:
            print(f"Benefits: {job.benefits}")
        if job.tags:
            print(f"Tags: {', '.join(job.tags)}")
        print(f"Apply: {details.apply_target or '-'}")
        return 0

    raise SystemExit(f"Unsupported command: {args.command}")


def _job_line(job: Job, *, saved: bool) -> str:
    marker = "*" if saved else " "
    salary = format_salary(job.salary_min, job.salary_max, job.salary_currency)
    return f"{marker} {job.id} | {job.title} | {job.company} | {job.location} | {salary}"


if __name__ == "__main__":
    raise SystemExit(main())
