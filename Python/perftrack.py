# Bradford Arrington 2025
import os
import time
import tracemalloc

import psutil

_printed_header = False


def file_size(file_name: str) -> int:
    try:
        file_info = os.stat(file_name)
        return file_info.st_size
    except FileNotFoundError:
        return 0


def compression_ratio(input_size: int, output_size: int) -> int:
    if input_size == 0:
        input_size = 1
    return 100 - int((output_size * 100) / input_size)


def print_ratios(input_file_path: str, output_file_path: str):
    input_size = file_size(input_file_path)
    output_size = file_size(output_file_path)

    print(f"\nInput bytes:             {input_size}")
    print(f"Output bytes:            {output_size}")
    print(f"Compression ratio:       {compression_ratio(input_size, output_size)}%")


def short_program_name(prog_name: str) -> str:
    short_name = os.path.basename(prog_name.replace('\\', '/').rsplit(':', 1)[-1])
    extension = short_name.rfind('.')
    if extension != -1:
        short_name = short_name[:extension]
    return short_name


def track_performance(name, func, *args, **kwargs):
    """Runs func, printing its wall time, user CPU time and peak traced memory."""
    global _printed_header

    process = psutil.Process(os.getpid())
    start_time = time.time()
    start_cpu = process.cpu_times().user
    tracemalloc.start()
    start_mem = tracemalloc.get_traced_memory()[0]

    try:
        result = func(*args, **kwargs)
        end_mem = tracemalloc.get_traced_memory()[1]
    finally:
        tracemalloc.stop()
    end_cpu = process.cpu_times().user
    end_time = time.time()

    wall_time_ms = (end_time - start_time) * 1000
    cpu_time_ms = (end_cpu - start_cpu) * 1000
    mem_used_kb = (end_mem - start_mem) / 1024

    if not _printed_header:
        print(f"{'Function':<20} {'Wall Time (ms)':>15} {'CPU Time (ms)':>15} {'Memory Used (KB)':>20}")
        _printed_header = True

    print(f"{name:<20} {wall_time_ms:15.2f} {cpu_time_ms:15.2f} {mem_used_kb:20.2f}")

    return result
