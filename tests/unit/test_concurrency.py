"""Thread-safety tests for HistoryStack appends and reads."""

import threading

from history_stack import HistoryStack, TestOutcome

THREADS = 8
BATCHES = 200


def _outcome_for(index):
    kinds = (TestOutcome.passed, TestOutcome.failed, TestOutcome.todo, TestOutcome.skipped)
    return kinds[index % len(kinds)](f"t{index}")


class TestConcurrentAppends:
    """Appends from many threads are applied atomically."""

    def test_no_lost_updates(self, history):
        barrier = threading.Barrier(THREADS)

        def worker():
            barrier.wait()
            for batch in range(BATCHES):
                history.append(_outcome_for(batch), _outcome_for(batch + 1))

        threads = [threading.Thread(target=worker) for _ in range(THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        total = THREADS * BATCHES * 2
        assert history.test_count == total
        assert history.result_count == total
        assert history.pass_count == total // 4
        assert history.fail_count == total // 4
        assert history.todo_count == total // 4
        assert history.skip_count == total // 4

    def test_readers_never_see_partial_appends(self, history):
        """Every outcome has exactly one classification, so snapshots must balance."""
        done = threading.Event()
        inconsistent = []

        def reader():
            while not done.is_set():
                stats = history.statistics()
                classified = (
                    stats.pass_count + stats.fail_count + stats.todo_count + stats.skip_count
                )
                if classified != stats.test_count or stats.result_count != stats.test_count:
                    inconsistent.append(stats)

        def writer():
            for batch in range(BATCHES):
                history.append(*(_outcome_for(batch + offset) for offset in range(3)))

        readers = [threading.Thread(target=reader) for _ in range(2)]
        writers = [threading.Thread(target=writer) for _ in range(4)]
        for thread in readers + writers:
            thread.start()
        for thread in writers:
            thread.join()
        done.set()
        for thread in readers:
            thread.join()

        assert inconsistent == []
        assert history.test_count == 4 * BATCHES * 3

    def test_shared_instance_created_once(self, isolated_shared):
        barrier = threading.Barrier(THREADS)
        seen = []

        def worker():
            barrier.wait()
            seen.append(HistoryStack.shared())

        threads = [threading.Thread(target=worker) for _ in range(THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(seen) == THREADS
        assert all(instance is seen[0] for instance in seen)
