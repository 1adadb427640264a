"""실행 종료 시 출력하는 요약 리포트."""

from model.stats import RunStatistics

LINE = "=" * 50
THIN_LINE = "-" * 50
_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size: int, decimals: int = 2) -> str:
    if size == 0:
        return "0 Bytes"

    sign = "-" if size < 0 else ""
    value = float(abs(size))
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{sign}{round(value, max(0, decimals)):g} {_UNITS[unit]}"


def reduction_percent(input_bytes: int, output_bytes: int) -> float:
    if input_bytes <= 0:
        return 0.0
    return (input_bytes - output_bytes) / input_bytes * 100


def render_report(stats: RunStatistics, watermark_enabled: bool = False) -> str:
    lines = [
        LINE,
        "SUMMARY REPORT".center(50).rstrip(),
        LINE,
        f"Total files processed: {stats.processed} files",
        f"Successfully processed: {stats.succeeded} files",
        f"Errors: {stats.errored} files",
        f"Skipped: {stats.skipped} files",
    ]
    if watermark_enabled:
        lines.append(f"Watermarked: {stats.watermarked} files")
    lines.append(THIN_LINE)

    if stats.processed > 0:
        lines.append("Output format breakdown:")
        for fmt, count in stats.format_counts.items():
            percentage = count / stats.processed * 100
            lines.append(f"  {fmt.upper()}: {count} files ({percentage:.1f}%)")
        lines.append(THIN_LINE)

        lines.extend([
            "Size statistics:",
            f"  Total original size: {format_bytes(stats.input_bytes)}",
            f"  Total processed size: {format_bytes(stats.output_bytes)}",
            f"  Total space saved: {format_bytes(stats.saved_bytes)} "
            f"({stats.reduction_percent:.2f}% reduction)",
            THIN_LINE,
        ])

    lines.append("Time statistics:")
    lines.append(f"  Total processing time: {stats.elapsed:.2f} seconds")
    if stats.processed > 0:
        lines.append(f"  Average time per image: {stats.average_seconds:.2f} seconds")
    lines.append(LINE)
    return "\n".join(lines)
