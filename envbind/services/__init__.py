"""Services Layer — imperative shell around the binding core (lookup selection, logging)."""
