"""Resource catalog service: resources, ratings and feedback over JSON collections."""
