"""Ask Freely server functions: question intake and email queue processing."""
