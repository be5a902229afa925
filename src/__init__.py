"""heatmap-daily: calendar contribution heatmaps."""
