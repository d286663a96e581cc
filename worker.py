"""
RQ worker entry point — runs delayed notification jobs.

The scheduler must be enabled for enqueue_in() jobs to be moved onto the queue
when they come due.
"""
from rq import Worker

from app.extensions import redis_queue_connection
from app.logging_config import configure_logging
from app.services.scheduler import QUEUE_NAME


def main():
    configure_logging()
    worker = Worker([QUEUE_NAME], connection=redis_queue_connection)
    worker.work(with_scheduler=True)


if __name__ == '__main__':
    main()
