from quadrant_plot.adapters.normalize import coerce_coordinates, coerce_labelled_coordinates, coerce_labels

__all__ = ["coerce_coordinates", "coerce_labelled_coordinates", "coerce_labels"]
