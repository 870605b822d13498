"""
buildtrigger: trigger a Jenkins build and wait for its result.

The package submits a build request over the Jenkins REST API, follows the
resulting queue item until it becomes a numbered build, then polls that build
until it finishes or a deadline passes.

The package is organized into specialized modules:
- config: Configuration loading (TOML file, environment, CLI) and validation
- models: Data structures and type definitions
- validation: Error taxonomy and input validation
- client: HTTP access to the Jenkins server
- lifecycle: Submission, queue watching, build watching
- cli: Command-line interface and orchestration

Usage:
    From command line:
        buildtrigger --job deploy -p ENV=staging

    Programmatically:
        from buildtrigger import TriggerRunner, load_config
        config = load_config()
        outcome = TriggerRunner(config).run()
"""

from .config import load_config
from .cli.orchestrator import TriggerRunner
from .cli import main_cli

from .models import (
    BuildHandle,
    BuildOutcome,
    Credentials,
    JobRequest,
    Phase,
    PollPolicy,
    QueueLocation,
    TerminalStatus,
    TriggerConfig,
)

from .validation import (
    ConfigError,
    JobFailureError,
    PhaseTimeoutError,
    StartError,
    SubmissionError,
    TransportError,
    TriggerError,
    ValidationError,
)

from .lifecycle import (
    BuildWatcher,
    LifecycleObserver,
    LoggingObserver,
    QueueWatcher,
    Submitter,
    poll_until,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "load_config",
    "TriggerRunner",
    "main_cli",
    # Models
    "BuildHandle",
    "BuildOutcome",
    "Credentials",
    "JobRequest",
    "Phase",
    "PollPolicy",
    "QueueLocation",
    "TerminalStatus",
    "TriggerConfig",
    # Errors
    "ConfigError",
    "JobFailureError",
    "PhaseTimeoutError",
    "StartError",
    "SubmissionError",
    "TransportError",
    "TriggerError",
    "ValidationError",
    # Lifecycle
    "BuildWatcher",
    "LifecycleObserver",
    "LoggingObserver",
    "QueueWatcher",
    "Submitter",
    "poll_until",
]
