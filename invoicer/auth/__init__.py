'''Request authorization: basic credentials for the index page and CSRF tokens for deletions'''
