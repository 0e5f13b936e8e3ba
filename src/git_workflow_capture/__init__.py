"""git-workflow-capture: PostToolUse hook that queues git/GitHub workflow memories."""

__version__ = "0.1.0"


def main():
    """Entry point for the git-workflow-capture hook."""
    from git_workflow_capture.hook import run_hook

    run_hook()
