"""Visual relational schema designer with DBML, SQL and SVG output."""
