import cProfile
import pstats

from smart_timetable.main import Scheduler
from smart_timetable.models.timeslots import TOTAL_SLOTS


def main():
    # Many small requests so the round-robin queue stays long
    for run in range(200):
        scheduler = Scheduler(seed=run)
        for i in range(TOTAL_SLOTS // 2):
            scheduler.start_selection(f"Faculty {i}", "Subject", 3, f"R{i % 6}")
            scheduler.auto_generate()
        scheduler.check_conflicts()
        scheduler.export_snapshot()


if __name__ == "__main__":
    with cProfile.Profile() as prof:
        main()

    stats = pstats.Stats(prof)
    stats.sort_stats(pstats.SortKey.TIME)
    stats.print_stats(30)
    stats.dump_stats("timetable.prof")
