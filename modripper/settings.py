OUTPUT_DIR = "."                    # where the .wav files are written
LENIENT = True                      # False: a module that ends early is reported instead of ripped
JOBS = 1                            # worker processes, 1 keeps everything in this process
LOG_LEVEL = "WARNING"               # choose from [DEBUG, INFO, WARNING, ERROR]

USE_PROFILER = False
