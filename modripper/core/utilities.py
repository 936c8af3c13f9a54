from modripper import settings
import pyinstrument
import functools
import sys


# --- decorators
def profile(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not settings.USE_PROFILER:
            return func(*args, **kwargs)

        profiler = pyinstrument.Profiler()
        profiler.start()
        try:
            # ---- profiled code
            return func(*args, **kwargs)
            # ---- end of profiled code
        finally:
            profiler.stop()
            print(profiler.output_text(unicode=True, color=False), file=sys.stderr)

    return wrapper
