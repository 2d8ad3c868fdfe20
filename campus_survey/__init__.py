"""Campus survey and feedback collection API."""
