"""HTTP surface for the EU legal text parser."""
